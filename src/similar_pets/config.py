
import logging
import time
import boto3
from dataclasses import dataclass
from typing import Optional, Dict

logger = logging.getLogger(__name__)

POOL_CAP = 80
DEFAULT_LIMIT = 12

PARAM_POOL_CAP = '/pets/similar/pool_cap'
PARAM_DEFAULT_LIMIT = '/pets/similar/default_limit'


@dataclass(frozen=True)
class EngineConfig:
    pool_cap: int = POOL_CAP
    default_limit: int = DEFAULT_LIMIT


class ConfigManager:
    """
    SSM Parameter Store からエンジン設定を取得し、TTLの間キャッシュする。
    取得・解釈に失敗した場合は固定のデフォルト値を返す。
    """
    def __init__(self, ttl_seconds: float = 60.0):
        self.ttl_seconds = ttl_seconds
        self._cached_config: Optional[EngineConfig] = None
        self._last_fetched_at: float = 0.0
        self._ssm_client = boto3.client('ssm')

    def get_config(self) -> EngineConfig:
        current_time = time.time()

        if self._cached_config and (current_time - self._last_fetched_at < self.ttl_seconds):
            return self._cached_config

        try:
            config = self._fetch_from_ssm()
            self._cached_config = config
            self._last_fetched_at = current_time
            return config
        except Exception as e:
            logger.warning("Falling back to default engine config: %s", e)
            return self._get_default_config()

    def _fetch_from_ssm(self) -> EngineConfig:
        names = [PARAM_POOL_CAP, PARAM_DEFAULT_LIMIT]

        response = self._ssm_client.get_parameters(Names=names)
        params = {p['Name']: p['Value'] for p in response.get('Parameters', [])}

        return EngineConfig(
            pool_cap=_positive_int(params, PARAM_POOL_CAP, POOL_CAP),
            default_limit=_positive_int(params, PARAM_DEFAULT_LIMIT, DEFAULT_LIMIT),
        )

    def _get_default_config(self) -> EngineConfig:
        return EngineConfig()


def _positive_int(params: Dict[str, str], name: str, default: int) -> int:
    if name not in params:
        return default
    value = int(params[name].strip())
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value
