"""Optional Redis backing for the route-color memo.

Every call degrades to "no cache" on failure: a broken or missing Redis
costs a recomputation, never a request.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

log = logging.getLogger(__name__)

_client = None
_resolved = False


def get_redis(url: Optional[str] = None):
    """Connect once and reuse. ``None`` when no URL is configured or the
    server does not answer a ping."""
    global _client, _resolved
    if _resolved:
        return _client
    _resolved = True

    if url is None:
        from rough_ride.config import settings
        url = settings.redis_url
    if not url:
        log.debug("No Redis URL configured, memo is process-local")
        return None

    try:
        import redis

        client = redis.Redis.from_url(url, decode_responses=True, socket_connect_timeout=3)
        client.ping()
    except Exception as exc:
        log.warning("Redis unavailable (%s), running without shared cache", exc)
        return None

    log.info("Redis connected: %s", url)
    _client = client
    return _client


def reset_redis() -> None:
    """Drop the resolved connection; the next ``get_redis`` reconnects."""
    global _client, _resolved
    _client = None
    _resolved = False


def redis_ok() -> bool:
    r = get_redis()
    if r is None:
        return False
    try:
        return bool(r.ping())
    except Exception as exc:
        log.debug("Redis ping failed: %s", exc)
        return False


# ── JSON helpers ─────────────────────────────────────────────────────────

def cache_get_json(key: str) -> Optional[Any]:
    r = get_redis()
    if r is None:
        return None
    try:
        raw = r.get(key)
    except Exception as exc:
        log.debug("GET %s failed: %s", key, exc)
        return None
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        log.warning("Dropping undecodable cache entry %s", key)
        return None


def cache_set_json(key: str, value: Any, ttl: int) -> None:
    r = get_redis()
    if r is None:
        return
    try:
        r.set(key, json.dumps(value), ex=ttl)
    except Exception as exc:
        log.debug("SET %s failed: %s", key, exc)
