"""S3 file storage backend implementing IFileStore.

Holds the storage collaborator's snapshot document and report exports.
Paths are relative to an optional key prefix so several environments can
share one bucket.
"""

from __future__ import annotations

import boto3
from botocore.exceptions import ClientError

from hrcore.core.exceptions import StorageError


class S3FileStore:
    """Production IFileStore backed by one S3 bucket."""

    def __init__(self, bucket: str, region: str = "us-east-1",
                 endpoint_url: str | None = None, prefix: str = "") -> None:
        self._bucket = bucket
        self._prefix = prefix.strip("/") + "/" if prefix.strip("/") else ""
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("s3", **kwargs)

    @property
    def bucket(self) -> str:
        return self._bucket

    def _key(self, path: str) -> str:
        return self._prefix + path

    def read(self, path: str) -> bytes:
        key = self._key(path)
        try:
            return self._client.get_object(Bucket=self._bucket, Key=key)["Body"].read()
        except ClientError as exc:
            raise StorageError(f"S3 read failed for s3://{self._bucket}/{key}: {exc}") from exc

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        key = self._key(path)
        try:
            self._client.put_object(Bucket=self._bucket, Key=key, Body=data, ContentType=content_type)
        except ClientError as exc:
            raise StorageError(f"S3 write failed for s3://{self._bucket}/{key}: {exc}") from exc
        return path

    def move(self, src: str, dst: str) -> None:
        source = {"Bucket": self._bucket, "Key": self._key(src)}
        try:
            self._client.copy_object(Bucket=self._bucket, CopySource=source, Key=self._key(dst))
            self._client.delete_object(**source)
        except ClientError as exc:
            raise StorageError(f"S3 move {src!r} -> {dst!r} failed: {exc}") from exc

    def list_files(self, prefix: str) -> list[str]:
        """Paths under prefix, relative to the store's own key prefix."""
        try:
            pages = self._client.get_paginator("list_objects_v2").paginate(
                Bucket=self._bucket, Prefix=self._key(prefix),
            )
            return [
                obj["Key"][len(self._prefix):]
                for page in pages
                for obj in page.get("Contents", [])
            ]
        except ClientError as exc:
            raise StorageError(f"S3 list failed for prefix={prefix!r}: {exc}") from exc
