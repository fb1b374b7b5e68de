
from typing import List, Optional, Protocol, Sequence
from similar_pets.profile import AttributeProfile, ScoredCandidate


class Ranker(Protocol):
    def rank(self, source_id: str, limit: Optional[int] = None) -> List[ScoredCandidate]:
        """
        基準ペットのidを受け取り、類似度の高い順に候補を返す
        """
        ...


class PetProvider(Protocol):
    def get_profile(self, pet_id: str) -> Optional[AttributeProfile]:
        """
        idに対応するプロフィールを返す。存在しなければNone
        """
        ...

    def get_candidate_pool(self, category: str, exclude_id: str, pool_cap: int) -> Sequence[AttributeProfile]:
        """
        同じカテゴリで公開対象の候補を最大pool_cap件返す。exclude_idは含めない。
        返す順序が同点時の順位になる。
        """
        ...


class AsyncPetProvider(Protocol):
    async def get_profile(self, pet_id: str) -> Optional[AttributeProfile]:
        ...

    async def get_candidate_pool(self, category: str, exclude_id: str, pool_cap: int) -> Sequence[AttributeProfile]:
        ...
