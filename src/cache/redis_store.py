# src/cache/redis_store.py — v2
"""Redis-backed layered summary cache (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Each (org, case) record is a JSON envelope stored under one key. The
connection is opened inside each operation, so constructing the cache needs
neither the package nor a reachable server.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from caselens.cache.envelope_store import EnvelopeSummaryCache
from caselens.cache.models import Envelope

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "caselens:case:"


class RedisSummaryCache(EnvelopeSummaryCache):
    """Redis envelope store for multi-instance deployments."""

    def __init__(self, redis_url: str, key_prefix: str = DEFAULT_KEY_PREFIX) -> None:
        self._redis_url = redis_url
        self._key_prefix = key_prefix

    async def _read_envelope(self, case_id: str, org_id: str) -> Envelope | None:
        client = self._connect()
        try:
            data = await client.get(self._record_key(case_id, org_id))
        finally:
            await client.aclose()
        if data is None:
            return None
        try:
            envelope = json.loads(data)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt cache record for case %s: %s", case_id, e)
            return None
        return envelope if isinstance(envelope, dict) else None

    async def _write_envelope(
        self, case_id: str, org_id: str, envelope: Envelope
    ) -> None:
        client = self._connect()
        try:
            await client.set(self._record_key(case_id, org_id), json.dumps(envelope))
        finally:
            await client.aclose()

    def _connect(self) -> Any:
        """Open an asyncio Redis client for the duration of one operation."""
        try:
            from redis import asyncio as aioredis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e
        return aioredis.from_url(self._redis_url, decode_responses=True)

    def _record_key(self, case_id: str, org_id: str) -> str:
        return f"{self._key_prefix}{org_id}:{case_id}"
