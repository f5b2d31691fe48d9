import copy
import logging
import threading
from typing import Dict, Iterable, Optional, Tuple

from models.domain import RecommendationMode, RecommendationsResult

logger = logging.getLogger(__name__)

CacheKey = Tuple[Tuple[str, ...], str, str]


def make_cache_key(priorities: Iterable[str], location: str, mode: RecommendationMode | str) -> CacheKey:
    mode_value = mode.value if isinstance(mode, RecommendationMode) else str(mode)
    return tuple(sorted(set(priorities))), location, mode_value


class RecommendationCache:
    """Process-lifetime cache of whole recommendation results.

    Keys ignore priority order and duplicates. Entries never expire; a race
    between two requests for the same key only costs a duplicate computation.
    Results are copied on the way in and out, so callers never share the
    stored object.
    """

    def __init__(self):
        self._entries: Dict[CacheKey, RecommendationsResult] = {}
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> Optional[RecommendationsResult]:
        with self._lock:
            cached = self._entries.get(key)
        return copy.deepcopy(cached) if cached is not None else None

    def put(self, key: CacheKey, result: RecommendationsResult) -> None:
        stored = copy.deepcopy(result)
        with self._lock:
            self._entries[key] = stored

    def clear(self) -> int:
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        logger.info(f"Cleared {removed} cached recommendation results")
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries


_recommendation_cache: Optional[RecommendationCache] = None
_singleton_lock = threading.Lock()


def get_recommendation_cache() -> RecommendationCache:
    global _recommendation_cache
    with _singleton_lock:
        if _recommendation_cache is None:
            _recommendation_cache = RecommendationCache()
        return _recommendation_cache


def reset_recommendation_cache() -> None:
    global _recommendation_cache
    _recommendation_cache = None
