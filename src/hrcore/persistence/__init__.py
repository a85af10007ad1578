"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from typing import NamedTuple

from hrcore.core.config import AppSettings
from hrcore.core.protocols import ICacheBackend, IFileStore, IPolicyStore, ISnapshotStore
from hrcore.models.policy import HRPolicy
from hrcore.persistence.dynamodb_backend import DynamoDBPolicyStore
from hrcore.persistence.local_backend import LocalFileStore
from hrcore.persistence.memory_backend import MemoryPolicyStore
from hrcore.persistence.redis_backend import RedisCacheBackend
from hrcore.persistence.s3_backend import S3FileStore
from hrcore.persistence.snapshot_store import JsonSnapshotStore


class Persistence(NamedTuple):
    snapshots: ISnapshotStore
    policies: IPolicyStore
    cache: ICacheBackend | None
    files: IFileStore


def create_persistence(settings: AppSettings | None = None) -> Persistence:
    """Create wired-up persistence backends from application settings.

    Without DynamoDB the built-in HRPolicy defaults serve as the GLOBAL
    policy; without Redis no cache is wired.
    """
    if settings is None:
        settings = AppSettings()

    cache = None
    if settings.redis.enabled:
        cache = RedisCacheBackend(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
            namespace=settings.redis.namespace,
        )

    if settings.storage.backend == "s3":
        files: IFileStore = S3FileStore(
            bucket=settings.s3.bucket,
            region=settings.s3.region,
            endpoint_url=settings.s3.endpoint_url,
            prefix=settings.s3.prefix,
        )
    else:
        files = LocalFileStore(".")

    if settings.dynamodb.enabled:
        policies: IPolicyStore = DynamoDBPolicyStore(
            table_suffix=settings.dynamodb.table_suffix,
            region=settings.dynamodb.region,
            endpoint_url=settings.dynamodb.endpoint_url,
            cache=cache,
        )
    else:
        policies = MemoryPolicyStore({"GLOBAL": HRPolicy().model_dump(mode="json")})

    snapshots = JsonSnapshotStore(files, settings.storage.data_path)
    return Persistence(snapshots=snapshots, policies=policies, cache=cache, files=files)
