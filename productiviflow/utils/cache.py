"""Read-through cache for small JSON payloads.

Values go to Redis while it answers; the first Redis failure switches the
backend to the in-process store for the rest of the process lifetime.
"""

from __future__ import annotations

import hashlib
import json
import threading
import time
from dataclasses import dataclass
from typing import Any

import redis
from loguru import logger

from productiviflow.config import settings


def _json_default(value: Any) -> Any:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if isinstance(value, set):
        return sorted(value)
    return str(value)


def build_cache_key(**components: Any) -> str:
    """Return a stable hash for the provided components."""

    payload = json.dumps(components, sort_keys=True, default=_json_default)
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()


@dataclass
class _CacheEntry:
    expires_at: float | None
    payload: str


class CacheBackend:
    """Namespaced JSON cache backed by Redis with a local fallback."""

    def __init__(self, redis_url: str | None = None) -> None:
        self._lock = threading.Lock()
        self._local: dict[str, _CacheEntry] = {}
        self._redis: redis.Redis | None = None
        if redis_url:
            self._redis = redis.Redis.from_url(
                redis_url, decode_responses=True, socket_connect_timeout=0.5
            )

    @staticmethod
    def _compose(namespace: str, key: str) -> str:
        return f"{namespace}:{key}"

    def _disable_redis(self, exc: redis.RedisError) -> None:
        logger.warning("Redis cache unavailable, using in-process cache", error=str(exc))
        self._redis = None

    def get(self, namespace: str, key: str) -> Any | None:
        namespaced = self._compose(namespace, key)
        if self._redis is not None:
            try:
                value = self._redis.get(namespaced)
            except redis.RedisError as exc:
                self._disable_redis(exc)
            else:
                if value is not None:
                    return json.loads(value)
        with self._lock:
            entry = self._local.get(namespaced)
            if not entry:
                return None
            if entry.expires_at is not None and entry.expires_at < time.time():
                self._local.pop(namespaced, None)
                return None
            return json.loads(entry.payload)

    def set(self, namespace: str, key: str, value: Any, ttl_seconds: int) -> None:
        namespaced = self._compose(namespace, key)
        payload = json.dumps(value, default=_json_default)
        if self._redis is not None:
            try:
                self._redis.set(namespaced, payload, ex=ttl_seconds)
            except redis.RedisError as exc:
                self._disable_redis(exc)
        with self._lock:
            expires_at = time.time() + ttl_seconds if ttl_seconds else None
            self._local[namespaced] = _CacheEntry(expires_at=expires_at, payload=payload)

    def invalidate(self, namespace: str, key: str) -> None:
        namespaced = self._compose(namespace, key)
        if self._redis is not None:
            try:
                self._redis.delete(namespaced)
            except redis.RedisError as exc:
                self._disable_redis(exc)
        with self._lock:
            self._local.pop(namespaced, None)

    def clear(self) -> None:
        """Reset the in-process store; used between tests."""

        with self._lock:
            self._local.clear()


cache_backend = CacheBackend(str(settings.REDIS_URL) if settings.REDIS_URL else None)

PROFILE_NAMESPACE = "user:profile"


def profile_cache_key(user_id: Any) -> str:
    return build_cache_key(user_id=str(user_id))


def invalidate_profile(user_id: Any) -> None:
    """Drop the cached profile after points or streak change."""

    cache_backend.invalidate(PROFILE_NAMESPACE, profile_cache_key(user_id))


__all__ = [
    "CacheBackend",
    "PROFILE_NAMESPACE",
    "build_cache_key",
    "cache_backend",
    "invalidate_profile",
    "profile_cache_key",
]
