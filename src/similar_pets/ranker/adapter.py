
from typing import Any, Callable, Dict, List, Optional
from similar_pets.errors import InvalidProfileError
from similar_pets.profile import AttributeProfile
from similar_pets.ranker.base import PetProvider

# camelCase (API/ORM) -> snake_case (AttributeProfile)
_FIELD_ALIASES = {
    'energyLevel': 'energy_level',
    'species': 'category',
}
_PROFILE_FIELDS = (
    'id', 'category', 'size', 'age', 'sex', 'energy_level', 'temperament', 'breed',
)
_REQUIRED_FIELDS = ('id', 'category', 'size', 'age', 'sex')


def profile_from_record(raw: Dict[str, Any]) -> AttributeProfile:
    """
    dictのレコードをAttributeProfileに変換する。
    プロフィールに無いキー(status, createdAt など)は無視する。
    """
    values = {}
    for key, value in raw.items():
        name = _FIELD_ALIASES.get(key, key)
        if name in _PROFILE_FIELDS:
            values[name] = value

    missing = [name for name in _REQUIRED_FIELDS if values.get(name) is None]
    if missing:
        raise InvalidProfileError(f"Record is missing required fields: {', '.join(missing)}")

    if not isinstance(values['id'], str):
        values['id'] = str(values['id'])

    return AttributeProfile(**values)


class CallablePetProvider(PetProvider):
    """
    既存の関数ベースのデータ取得ロジックをラップし、
    PetProviderインターフェースに適合させるアダプター
    """
    def __init__(
        self,
        profile_func: Callable[[str], Optional[Dict[str, Any]]],
        pool_func: Callable[[str, str, int], List[Dict[str, Any]]],
    ):
        self.profile_func = profile_func
        self.pool_func = pool_func

    def get_profile(self, pet_id: str) -> Optional[AttributeProfile]:
        raw = self.profile_func(pet_id)
        if raw is None:
            return None
        return profile_from_record(raw)

    def get_candidate_pool(self, category: str, exclude_id: str, pool_cap: int) -> List[AttributeProfile]:
        raw_results = self.pool_func(category, exclude_id, pool_cap)
        return [profile_from_record(raw) for raw in raw_results]
