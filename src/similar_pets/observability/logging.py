
import json
import logging
from typing import List
from similar_pets.profile import ScoredCandidate

logger = logging.getLogger("similar_pets.events")
logger.setLevel(logging.INFO)
# 出力先は実行環境に依存するため、ここでは標準出力のみを想定
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)


def log_ranking_result(ranking_id: str, source_id: str, limit: int, pool_size: int,
                       items: List[ScoredCandidate]):
    """
    類似ペットのランキング結果を構造化ログ(JSON)として出力する。
    """
    log_data = {
        "event": "similar_pets_ranked",
        "ranking_id": ranking_id,
        "source_id": source_id,
        "limit": limit,
        "pool_size": pool_size,
        "items": [
            {
                "id": item.candidate_id,
                "score": item.score,
                "rank": i + 1,
            }
            for i, item in enumerate(items)
        ]
    }

    logger.info(json.dumps(log_data))


def log_source_not_found(source_id: str):
    logger.info(json.dumps({
        "event": "similar_pets_source_not_found",
        "source_id": source_id,
    }))
