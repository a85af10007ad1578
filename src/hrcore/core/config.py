"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class StorageConfig(BaseSettings):
    """Where the storage collaborator's JSON document is read from."""

    model_config = {"env_prefix": "HRCORE_STORAGE_"}

    backend: Literal["local", "s3"] = "local"
    data_path: str = "data.json"  # filesystem path or S3 key


class DynamoDBConfig(BaseSettings):
    """DynamoDB policy table configuration."""

    model_config = {"env_prefix": "HRCORE_DYNAMO_"}

    enabled: bool = False
    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis cache configuration."""

    model_config = {"env_prefix": "HRCORE_REDIS_"}

    enabled: bool = False
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    namespace: str = "hrcore"


class S3Config(BaseSettings):
    """S3 bucket holding snapshots and report exports."""

    model_config = {"env_prefix": "HRCORE_S3_"}

    bucket: str = "hrcore-data"
    prefix: str = ""  # e.g. "uat" to keep environments apart in one bucket
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class ReportConfig(BaseSettings):
    """Report recomputation and export settings."""

    model_config = {"env_prefix": "HRCORE_REPORTS_"}

    cache_enabled: bool = False
    cache_ttl: int = 60
    export_prefix: str = "exports/"


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "HRCORE_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    policy_scope: str = "GLOBAL"

    storage: StorageConfig = StorageConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
    s3: S3Config = S3Config()
    reports: ReportConfig = ReportConfig()
