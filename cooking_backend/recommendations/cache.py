from __future__ import annotations

import threading
import time
from typing import Any, Hashable

from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .scoring import UserContext

_cache: dict[Hashable, dict[str, Any]] = {}
_hits: int = 0
_misses: int = 0
_lock = threading.Lock()


def make_key(
    context: UserContext,
    limit: int,
    catalog_revision: int,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> tuple[UserContext, int, int, RankingConfig]:
    """Everything a ranking depends on; all parts are frozen and hashable."""
    return (context, limit, catalog_revision, config)


def _evict_expired(now: float) -> None:
    expired = [k for k, entry in _cache.items() if entry["expires_at"] <= now]
    for key in expired:
        del _cache[key]


def cache_get(key: Hashable) -> Any | None:
    global _hits, _misses
    now = time.time()
    with _lock:
        entry = _cache.get(key)
        if entry is not None and now < entry["expires_at"]:
            _hits += 1
            return entry["value"]
        if entry is not None:
            del _cache[key]
        _misses += 1
        return None


def cache_set(
    key: Hashable,
    value: Any,
    ttl: float = DEFAULT_RANKING_CONFIG.cache_ttl_seconds,
) -> None:
    now = time.time()
    with _lock:
        # pantry changes produce new keys, so stale snapshots are swept here
        _evict_expired(now)
        _cache[key] = {"value": value, "expires_at": now + ttl}


def get_cache_stats() -> dict:
    with _lock:
        lookups = _hits + _misses
        hit_rate = round(_hits / lookups * 100, 1) if lookups else 0.0
        return {"size": len(_cache), "hits": _hits, "misses": _misses, "hit_rate": hit_rate}


def clear_cache() -> None:
    global _hits, _misses
    with _lock:
        _cache.clear()
        _hits = 0
        _misses = 0
