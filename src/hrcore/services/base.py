"""Base service with common dependency wiring and lifecycle patterns."""

from __future__ import annotations

from typing import Any

from hrcore.core.config import AppSettings
from hrcore.core.exceptions import CacheError
from hrcore.core.protocols import ICacheBackend, IFileStore, IPolicyStore, ISnapshotStore
from hrcore.models.policy import HRPolicy


class BaseService:
    """Common base for hrcore services.

    Snapshot store, policy store, optional cache and optional file store
    are injected at construction time.
    """

    def __init__(
        self,
        *,
        settings: AppSettings,
        snapshots: ISnapshotStore,
        policies: IPolicyStore,
        cache: ICacheBackend | None = None,
        files: IFileStore | None = None,
    ) -> None:
        self._settings = settings
        self._snapshots = snapshots
        self._policies = policies
        self._cache = cache
        self._files = files

    def policy(self, scope: str | None = None) -> HRPolicy:
        """Effective policy for scope (default: settings.policy_scope)."""
        scope = scope or self._settings.policy_scope
        item = self._policies.get_policy(scope)
        return HRPolicy.model_validate({**item, "scope": scope})

    def readiness(self) -> None:
        """Raise an HRCoreError when any backing store is unavailable."""
        self._snapshots.load()
        self.policy()
        if self._cache is not None and not self._cache.ping():
            raise CacheError("Cache did not answer PING")

    def health_check(self) -> dict[str, Any]:
        """Return service health status."""
        return {
            "service": self.__class__.__name__,
            "status": "healthy",
            "environment": self._settings.environment,
        }
