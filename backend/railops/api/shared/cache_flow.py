"""Cache lookup and refresh flow shared across dashboard endpoints."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import Response
from pydantic import BaseModel

from railops.core.metrics import observe_cache_refresh, record_cache_event
from railops.services.response_cache import ResponseCache

logger = logging.getLogger(__name__)

CACHE_STATUS_HEADER = "X-Cache-Status"


def to_payload(value: Any) -> Any:
    """JSON-ready form of a service result."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, list):
        return [to_payload(item) for item in value]
    return value


async def serve_cached(
    cache: ResponseCache,
    cache_key: str,
    cache_name: str,
    response: Response,
    compute: Callable[[], Awaitable[Any]],
    ttl_seconds: int | None = None,
) -> Any:
    """Return the cached payload for `cache_key`, computing and storing it on a miss.

    The stored value is the serialized payload, so a hit returns exactly
    what the first caller received.
    """
    cached_payload = await cache.get_json(cache_key)
    if cached_payload is not None:
        record_cache_event(cache_name, "hit")
        response.headers[CACHE_STATUS_HEADER] = "hit"
        return cached_payload

    record_cache_event(cache_name, "miss")
    start = time.perf_counter()
    payload = to_payload(await compute())
    observe_cache_refresh(cache_name, time.perf_counter() - start)

    await cache.set_json(cache_key, payload, ttl_seconds)
    logger.debug("Stored %s response under %s", cache_name, cache_key)
    response.headers[CACHE_STATUS_HEADER] = "miss"
    return payload
