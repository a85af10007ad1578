"""Tests for the in-memory fakes and create_persistence wiring."""

from __future__ import annotations

import pytest

from hrcore.core.config import AppSettings, DynamoDBConfig, RedisConfig
from hrcore.core.exceptions import PolicyNotFoundError
from hrcore.persistence import create_persistence
from hrcore.persistence.dynamodb_backend import DynamoDBPolicyStore
from hrcore.persistence.local_backend import LocalFileStore
from hrcore.persistence.memory_backend import MemoryPolicyStore
from hrcore.persistence.snapshot_store import JsonSnapshotStore
from tests.fakes import MemoryCacheBackend, MemoryFileStore


class TestMemoryPolicyStore:
    def test_global_fallback(self):
        store = MemoryPolicyStore({"GLOBAL": {"leave": {"annual": 20}}})
        assert store.get_policy("DEPT#1") == {"leave": {"annual": 20}}

    def test_missing_raises(self):
        with pytest.raises(PolicyNotFoundError):
            MemoryPolicyStore().get_policy("GLOBAL")

    def test_returns_copies(self):
        store = MemoryPolicyStore({"GLOBAL": {"leave": {"annual": 20}}})
        store.get_policy("GLOBAL")["leave"]["annual"] = 0
        assert store.get_policy("GLOBAL")["leave"]["annual"] == 20


def test_cache_delete():
    cache = MemoryCacheBackend()
    cache.setex("k", 10, "v")
    cache.delete("k")
    assert cache.get("k") is None
    assert cache.ping() is True


def test_file_store_tracks_content_type():
    files = MemoryFileStore()
    files.write("a.xlsx", b"x", content_type="application/test")
    assert files.content_types["a.xlsx"] == "application/test"
    assert files.list_files("a") == ["a.xlsx"]


class TestCreatePersistence:
    def test_defaults_are_local_and_uncached(self):
        p = create_persistence(AppSettings())
        assert p.cache is None
        assert isinstance(p.files, LocalFileStore)
        assert isinstance(p.snapshots, JsonSnapshotStore)
        assert p.policies.get_policy("GLOBAL")["leave"]["annual"] == 20

    def test_dynamodb_when_enabled(self):
        settings = AppSettings(dynamodb=DynamoDBConfig(enabled=True, table_suffix="-dev"))
        p = create_persistence(settings)
        assert isinstance(p.policies, DynamoDBPolicyStore)
        assert p.policies.table_name == "hrcore-policies-dev"

    def test_redis_when_enabled(self, monkeypatch):
        monkeypatch.setattr("redis.Redis", lambda **kwargs: object())
        p = create_persistence(AppSettings(redis=RedisConfig(enabled=True)))
        assert p.cache is not None
