"""In-memory backends for unit tests: dict-backed fakes."""

from __future__ import annotations

import copy
from typing import Any

from hrcore.core.exceptions import PolicyNotFoundError, StorageError
from hrcore.models.entities import Snapshot

GLOBAL_SCOPE = "GLOBAL"


class MemorySnapshotStore:
    """ISnapshotStore holding one replaceable Snapshot."""

    def __init__(self, snapshot: Snapshot | None = None) -> None:
        self._snapshot = snapshot or Snapshot()
        self.load_count = 0

    def load(self) -> Snapshot:
        self.load_count += 1
        return self._snapshot

    def replace(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot


class MemoryPolicyStore:
    """Dict-backed IPolicyStore with the same GLOBAL fallback as DynamoDB."""

    def __init__(self, policies: dict[str, dict[str, Any]] | None = None) -> None:
        self._policies: dict[str, dict[str, Any]] = dict(policies or {})

    def put_policy(self, scope: str, policy: dict[str, Any]) -> None:
        self._policies[scope] = policy

    def get_policy(self, scope: str) -> dict[str, Any]:
        item = self._policies.get(scope) or self._policies.get(GLOBAL_SCOPE)
        if item is None:
            raise PolicyNotFoundError(f"No HR policy for scope={scope!r}")
        return copy.deepcopy(item)


class MemoryCacheBackend:
    """Dict-backed ICacheBackend for unit tests."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def ping(self) -> bool:
        return True

    def keys(self) -> list[str]:
        return list(self._store)


class MemoryFileStore:
    """Dict-backed IFileStore for unit tests."""

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self._files: dict[str, bytes] = dict(files or {})
        self.content_types: dict[str, str] = {}

    def read(self, path: str) -> bytes:
        try:
            return self._files[path]
        except KeyError as exc:
            raise StorageError(f"No such file {path!r}") from exc

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        self._files[path] = data
        self.content_types[path] = content_type
        return path

    def move(self, src: str, dst: str) -> None:
        self._files[dst] = self.read(src)
        del self._files[src]

    def list_files(self, prefix: str) -> list[str]:
        return [k for k in self._files if k.startswith(prefix)]
