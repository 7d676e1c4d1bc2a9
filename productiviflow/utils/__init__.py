"""Utility helpers package."""

from productiviflow.utils.cache import CacheBackend, build_cache_key, cache_backend

__all__ = ["CacheBackend", "cache_backend", "build_cache_key"]
