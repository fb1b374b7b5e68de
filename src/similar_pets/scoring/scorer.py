
import math
from dataclasses import dataclass, field
from typing import List, Optional

from similar_pets.profile import AttributeProfile
from similar_pets.scoring.bucketer import age_bucket, size_class


@dataclass(frozen=True)
class ScoringWeights:
    size: float = 2.0
    size_partial: float = 1.0
    age: float = 1.5
    age_partial: float = 0.75
    age_proximity_years: float = 2.0
    sex: float = 1.0
    energy_level: float = 1.0
    temperament: float = 1.0
    breed: float = 0.5
    breed_partial: float = 0.25


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True)
class AttributeScore:
    attribute: str
    earned: float
    possible: float


@dataclass
class ScoreBreakdown:
    attributes: List[AttributeScore] = field(default_factory=list)

    @property
    def total_weight(self) -> float:
        return sum(a.possible for a in self.attributes)

    @property
    def earned_weight(self) -> float:
        return sum(a.earned for a in self.attributes)

    @property
    def score(self) -> int:
        total = self.total_weight
        if total == 0:
            # 比較可能な属性がない場合は「区別できない」とみなす
            return 100
        return round_half_up(self.earned_weight / total * 100)

    def add(self, attribute: str, earned: float, possible: float):
        self.attributes.append(AttributeScore(attribute=attribute, earned=earned, possible=possible))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _breed_key(breed: Optional[str]) -> Optional[str]:
    if breed is None:
        return None
    key = breed.strip().lower()
    return key or None


class SimilarityScorer:
    def __init__(self, weights: ScoringWeights = DEFAULT_WEIGHTS):
        self.weights = weights

    def breakdown(self, source: AttributeProfile, candidate: AttributeProfile) -> ScoreBreakdown:
        """
        Weighted partial-credit comparison of two profiles of the same category.

        Size, age bucket and sex are always compared. Energy level, temperament
        and breed only count when both profiles carry a value; otherwise they
        add nothing to the total weight.

        Returns:
            ScoreBreakdown with one entry per compared attribute, in
            evaluation order.
        """
        w = self.weights
        result = ScoreBreakdown()

        # Size: exact match, or half credit within the same coarse class
        if source.size == candidate.size:
            earned = w.size
        elif size_class(source.size) == size_class(candidate.size):
            earned = w.size_partial
        else:
            earned = 0.0
        result.add("size", earned, w.size)

        # Age: same bucket, or close in raw years across a bucket boundary
        if age_bucket(source.age) == age_bucket(candidate.age):
            earned = w.age
        elif abs(source.age - candidate.age) <= w.age_proximity_years:
            earned = w.age_partial
        else:
            earned = 0.0
        result.add("age", earned, w.age)

        result.add("sex", w.sex if source.sex == candidate.sex else 0.0, w.sex)

        if source.energy_level is not None and candidate.energy_level is not None:
            earned = w.energy_level if source.energy_level == candidate.energy_level else 0.0
            result.add("energy_level", earned, w.energy_level)

        if source.temperament is not None and candidate.temperament is not None:
            earned = w.temperament if source.temperament == candidate.temperament else 0.0
            result.add("temperament", earned, w.temperament)

        s_breed = _breed_key(source.breed)
        c_breed = _breed_key(candidate.breed)
        if s_breed is not None and c_breed is not None:
            if s_breed == c_breed:
                earned = w.breed
            elif s_breed in c_breed or c_breed in s_breed:
                earned = w.breed_partial
            else:
                earned = 0.0
            result.add("breed", earned, w.breed)

        return result

    def score(self, source: AttributeProfile, candidate: AttributeProfile) -> int:
        return self.breakdown(source, candidate).score


_default_scorer = SimilarityScorer()


def compute_similarity_score(source: AttributeProfile, candidate: AttributeProfile) -> int:
    """Score two profiles with the default weight table. Result is in [0, 100]."""
    return _default_scorer.score(source, candidate)
