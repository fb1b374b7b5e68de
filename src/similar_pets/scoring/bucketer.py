
from enum import Enum
from similar_pets.profile import PetSize

YOUNG_MAX_AGE = 1.0
MID_MAX_AGE = 7.0


class AgeBucket(Enum):
    YOUNG = "young"
    MID = "mid"
    SENIOR = "senior"


class SizeClass(Enum):
    COMPACT = "compact"  # small, medium
    LARGE = "large"      # large, xlarge


_SIZE_CLASSES = {
    PetSize.SMALL: SizeClass.COMPACT,
    PetSize.MEDIUM: SizeClass.COMPACT,
    PetSize.LARGE: SizeClass.LARGE,
    PetSize.XLARGE: SizeClass.LARGE,
}


def age_bucket(age: float) -> AgeBucket:
    """
    年齢(年)を3つの年齢帯に振り分ける。
    境界値は下側の帯に含まれる (1.0 -> YOUNG, 7.0 -> MID)。
    """
    if age <= YOUNG_MAX_AGE:
        return AgeBucket.YOUNG
    if age <= MID_MAX_AGE:
        return AgeBucket.MID
    return AgeBucket.SENIOR


def size_class(size: PetSize) -> SizeClass:
    return _SIZE_CLASSES[PetSize.parse(size)]
