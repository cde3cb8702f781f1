"""Short-lived read cache with explicit and pattern invalidation.

Entries are advisory copies of query results. Services always read and
write the database; only read-only endpoints consult this cache.
"""

import logging
from typing import Any

from portal.extensions import cache

logger = logging.getLogger(__name__)

# Registry of keys written through this module, used for pattern deletes
KEY_INDEX = "cache:keys"


def get(key: str) -> Any | None:
    """Get a cached value, or None when missing or expired."""
    return cache.get(key)


def set(key: str, value: Any, timeout: int | None = None) -> None:  # noqa: A001
    """Store a value. ``timeout`` defaults to CACHE_DEFAULT_TIMEOUT (30s)."""
    cache.set(key, value, timeout=timeout)

    # Read-modify-write without a lock: concurrent sets can drop an index
    # entry, so a pattern delete may miss that key until its TTL expires.
    keys = cache.get(KEY_INDEX) or []
    if key not in keys:
        keys.append(key)
        cache.set(KEY_INDEX, keys, timeout=0)


def invalidate(*keys: str) -> None:
    """Drop specific keys."""
    if keys:
        cache.delete_many(*keys)


def invalidate_pattern(fragment: str) -> int:
    """Drop every tracked key containing ``fragment``. Returns the count."""
    keys = cache.get(KEY_INDEX) or []
    matching = [k for k in keys if fragment in k]
    if matching:
        cache.delete_many(*matching)
        cache.set(KEY_INDEX, [k for k in keys if k not in matching], timeout=0)
        logger.debug(f"Invalidated {len(matching)} cache keys matching {fragment!r}")
    return len(matching)
