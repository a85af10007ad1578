"""Shared test doubles: re-export memory backends."""

from __future__ import annotations

from hrcore.core.exceptions import CacheError
from hrcore.persistence.memory_backend import (
    MemoryCacheBackend,
    MemoryFileStore,
    MemoryPolicyStore,
    MemorySnapshotStore,
)


class UnreachableCacheBackend:
    """ICacheBackend whose every call fails the way RedisCacheBackend does when Redis is down."""

    def get(self, key: str) -> str | None:
        raise CacheError(f"Redis GET failed for key={key!r}: connection refused")

    def setex(self, key: str, ttl: int, value: str) -> None:
        raise CacheError(f"Redis SETEX failed for key={key!r}: connection refused")

    def delete(self, key: str) -> None:
        raise CacheError(f"Redis DELETE failed for key={key!r}: connection refused")

    def ping(self) -> bool:
        return False


__all__ = [
    "MemoryCacheBackend",
    "MemoryFileStore",
    "MemoryPolicyStore",
    "MemorySnapshotStore",
    "UnreachableCacheBackend",
]
