
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from similar_pets.errors import InvalidProfileError


class PetSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    XLARGE = "xlarge"

    @classmethod
    def parse(cls, label: "str | PetSize") -> "PetSize":
        """
        サイズラベルを大文字小文字を区別せずに解釈する。
        "extra-large" 等の表記揺れは XLARGE として扱う。
        """
        if isinstance(label, PetSize):
            return label
        if not isinstance(label, str):
            raise InvalidProfileError(f"size must be a string, got {type(label).__name__}")

        key = label.strip().lower()
        key = _SIZE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise InvalidProfileError(f"Unknown size: {label!r}") from None


_SIZE_ALIASES = {
    "extra-large": "xlarge",
    "extra_large": "xlarge",
    "extra large": "xlarge",
    "x-large": "xlarge",
}


def _clean_optional(value: Optional[str]) -> Optional[str]:
    # 空文字・空白のみは「不明」と同じ扱い
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_text(name: str, value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidProfileError(f"{name} must be a non-empty string")
    return value.strip()


def _require_age(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidProfileError(f"age must be a number, got {value!r}")
    if not math.isfinite(value) or value < 0:
        raise InvalidProfileError(f"age must be a finite non-negative number, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class AttributeProfile:
    """
    類似度計算に使うペットの属性スナップショット。
    生成時に正規化・検証を一度だけ行い、Scorer側では再検証しない。
    """
    id: str
    category: str
    size: PetSize
    age: float
    sex: str
    energy_level: Optional[str] = None
    temperament: Optional[str] = None
    breed: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "id", _require_text("id", self.id))
        object.__setattr__(self, "category", _require_text("category", self.category))
        object.__setattr__(self, "size", PetSize.parse(self.size))
        object.__setattr__(self, "age", _require_age(self.age))
        object.__setattr__(self, "sex", _require_text("sex", self.sex))
        object.__setattr__(self, "energy_level", _clean_optional(self.energy_level))
        object.__setattr__(self, "temperament", _clean_optional(self.temperament))
        object.__setattr__(self, "breed", _clean_optional(self.breed))


@dataclass(frozen=True)
class ScoredCandidate:
    candidate_id: str
    score: int  # 0..100
