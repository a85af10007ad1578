"""Protocol interfaces for all hrcore collaborators.

All inter-layer communication uses these Protocols: structural typing,
no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hrcore.models.entities import Snapshot


# ---------------------------------------------------------------------------
# Storage collaborator: entity snapshots
# ---------------------------------------------------------------------------

@runtime_checkable
class ISnapshotStore(Protocol):
    """Read-only access to the latest snapshot of stored HR entities."""

    def load(self) -> Snapshot: ...


# ---------------------------------------------------------------------------
# Persistence: Policy Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IPolicyStore(Protocol):
    """HR policy items (leave quotas, payroll rates) keyed by scope."""

    def get_policy(self, scope: str) -> dict[str, Any]: ...


# ---------------------------------------------------------------------------
# Persistence: Cache Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def ping(self) -> bool: ...


# ---------------------------------------------------------------------------
# Persistence: File Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IFileStore(Protocol):
    """S3-compatible file storage interface."""

    def read(self, path: str) -> bytes: ...

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str: ...

    def move(self, src: str, dst: str) -> None: ...

    def list_files(self, prefix: str) -> list[str]: ...
