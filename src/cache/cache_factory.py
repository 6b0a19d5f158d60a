# src/cache/cache_factory.py — v4
"""Factory for layered summary cache instantiation.

Only backends that persist across requests are configurable here.
InMemorySummaryCache is injected directly by the caller.
"""

from __future__ import annotations

from caselens.cache.base_cache_store import BaseSummaryCache
from caselens.config.settings import Settings


def create_summary_cache(settings: Settings | None = None) -> BaseSummaryCache:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. None means no caching.

    Returns:
        Configured BaseSummaryCache implementation.
    """
    backend = "none" if settings is None else settings.cache_backend

    if backend == "none":
        from caselens.cache.null_store import NullSummaryCache
        return NullSummaryCache()

    if backend == "json":
        from caselens.cache.json_store import JsonFileSummaryCache
        return JsonFileSummaryCache(cache_root=settings.cache_root)

    if backend == "redis":
        from caselens.cache.redis_store import RedisSummaryCache
        return RedisSummaryCache(
            redis_url=settings.cache_redis_url,
            key_prefix=settings.cache_redis_key_prefix,
        )

    raise ValueError(f"Unsupported cache backend: {backend!r}")
