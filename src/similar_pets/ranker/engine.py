
import asyncio
import logging
import uuid
from itertools import islice
from typing import Iterable, List, Optional

from similar_pets.config import ConfigManager, EngineConfig
from similar_pets.errors import InvalidArgumentError, PetNotFoundError
from similar_pets.observability.logging import log_ranking_result, log_source_not_found
from similar_pets.profile import AttributeProfile, ScoredCandidate
from similar_pets.ranker.base import AsyncPetProvider, PetProvider, Ranker
from similar_pets.scoring.scorer import SimilarityScorer

logger = logging.getLogger(__name__)


def resolve_limit(limit: Optional[int], config: EngineConfig) -> int:
    """
    Normalize the caller's limit.

    None means the configured default. Values below 1 are clamped to 1;
    there is no upper bound besides the size of the candidate pool.

    Raises:
        InvalidArgumentError: if limit is not an integer.
    """
    if limit is None:
        return config.default_limit
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidArgumentError(f"limit must be an integer, got {limit!r}")
    if limit < 1:
        logger.debug("Clamping limit %d to 1", limit)
        return 1
    return limit


def rank_candidates(
    scorer: SimilarityScorer,
    source: AttributeProfile,
    pool: Iterable[AttributeProfile],
    limit: int,
    pool_cap: int,
) -> List[ScoredCandidate]:
    """
    Score every candidate against the source and keep the best `limit`.

    Candidates with equal scores keep the order in which the provider
    delivered them.
    """
    scored: List[ScoredCandidate] = []
    for candidate in islice(pool, pool_cap):
        if candidate.id == source.id:
            continue
        breakdown = scorer.breakdown(source, candidate)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Scored %s against %s: %d (%s)",
                candidate.id, source.id, breakdown.score,
                ", ".join(f"{a.attribute}={a.earned}/{a.possible}" for a in breakdown.attributes),
            )
        scored.append(ScoredCandidate(candidate_id=candidate.id, score=breakdown.score))

    # sorted() is stable with reverse=True, so ties stay in pool order
    scored = sorted(scored, key=lambda c: c.score, reverse=True)
    return scored[:limit]


class _EngineBase:
    def __init__(self, scorer: Optional[SimilarityScorer] = None,
                 config_manager: Optional[ConfigManager] = None):
        self.scorer = scorer or SimilarityScorer()
        self.config_manager = config_manager

    def _get_config(self) -> EngineConfig:
        if self.config_manager is None:
            return EngineConfig()
        return self.config_manager.get_config()

    def _finish(self, source: AttributeProfile, pool, limit: int, config: EngineConfig) -> List[ScoredCandidate]:
        pool = list(pool)
        items = rank_candidates(self.scorer, source, pool, limit, config.pool_cap)
        log_ranking_result(str(uuid.uuid4()), source.id, limit, len(pool), items)
        return items


class SimilarPetsEngine(_EngineBase, Ranker):
    """
    Ranks the candidate pool of a source pet by attribute similarity.

    The engine keeps no state between calls besides its collaborators, so
    one instance can serve concurrent requests.
    """
    def __init__(self, provider: PetProvider, scorer: Optional[SimilarityScorer] = None,
                 config_manager: Optional[ConfigManager] = None):
        super().__init__(scorer=scorer, config_manager=config_manager)
        self.provider = provider

    def rank(self, source_id: str, limit: Optional[int] = None) -> List[ScoredCandidate]:
        config = self._get_config()
        limit = resolve_limit(limit, config)

        source = self.provider.get_profile(source_id)
        if source is None:
            log_source_not_found(source_id)
            raise PetNotFoundError(source_id)

        pool = self.provider.get_candidate_pool(source.category, source.id, config.pool_cap)
        return self._finish(source, pool, limit, config)


class AsyncSimilarPetsEngine(_EngineBase):
    """Same contract as SimilarPetsEngine, for providers doing async I/O."""

    def __init__(self, provider: AsyncPetProvider, scorer: Optional[SimilarityScorer] = None,
                 config_manager: Optional[ConfigManager] = None):
        super().__init__(scorer=scorer, config_manager=config_manager)
        self.provider = provider

    async def rank(self, source_id: str, limit: Optional[int] = None) -> List[ScoredCandidate]:
        # SSM fetch is blocking I/O
        config = await asyncio.to_thread(self._get_config)
        limit = resolve_limit(limit, config)

        source = await self.provider.get_profile(source_id)
        if source is None:
            log_source_not_found(source_id)
            raise PetNotFoundError(source_id)

        pool = await self.provider.get_candidate_pool(source.category, source.id, config.pool_cap)
        return self._finish(source, pool, limit, config)
