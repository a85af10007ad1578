"""DynamoDB backend implementing IPolicyStore with Redis caching.

Table ``hrcore-policies{suffix}`` holds one item per scope:

    PK = "SCOPE#<scope>", SK = "POLICY"
    leave / payroll / attendance / reports maps mirroring HRPolicy

A scope without its own item falls back to SCOPE#GLOBAL.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any

import boto3

from hrcore.core.exceptions import CacheError, PolicyNotFoundError

logger = logging.getLogger(__name__)

POLICY_TABLE = "hrcore-policies"
GLOBAL_SCOPE = "GLOBAL"
_KEY_ATTRS = ("PK", "SK")
FALLBACK_MARKER = "@GLOBAL"


def _plain_number(value: Decimal) -> int | str:
    """Integral Decimals become int; fractional ones keep exact text for rates."""
    return int(value) if value == value.to_integral_value() else str(value)


def _decode_decimals(obj: Any) -> Any:
    if isinstance(obj, Decimal):
        return _plain_number(obj)
    if isinstance(obj, dict):
        return {k: _decode_decimals(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_decode_decimals(v) for v in obj]
    return obj


def encode_policy_item(scope: str, policy: dict[str, Any]) -> dict[str, Any]:
    """DynamoDB item for a policy dict (JSON-mode dump of HRPolicy)."""

    def enc(obj: Any) -> Any:
        if isinstance(obj, float):
            return Decimal(str(obj))
        if isinstance(obj, dict):
            return {k: enc(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [enc(v) for v in obj]
        return obj

    body = {k: v for k, v in policy.items() if k != "scope"}
    return {"PK": f"SCOPE#{scope}", "SK": "POLICY", **enc(body)}


class DynamoDBPolicyStore:
    """Production IPolicyStore backed by DynamoDB + optional Redis cache."""

    CACHE_TTL = 300  # 5 minutes

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None, cache: Any = None) -> None:
        self._table_suffix = table_suffix
        self._cache = cache
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)

    @property
    def table_name(self) -> str:
        return f"{POLICY_TABLE}{self._table_suffix}"

    def _get_item(self, scope: str) -> dict[str, Any] | None:
        resp = self._ddb.Table(self.table_name).get_item(Key={"PK": f"SCOPE#{scope}", "SK": "POLICY"})
        item = resp.get("Item")
        if item is None:
            return None
        return {k: _decode_decimals(v) for k, v in item.items() if k not in _KEY_ATTRS}

    def _cache_get(self, scope: str) -> str | None:
        if self._cache is None:
            return None
        try:
            return self._cache.get(f"policy:{scope}")
        except CacheError as exc:
            logger.warning("Policy cache read failed for %s: %s", scope, exc)
            return None

    def _cache_set(self, scope: str, value: str) -> None:
        if self._cache is None:
            return
        try:
            self._cache.setex(f"policy:{scope}", self.CACHE_TTL, value)
        except CacheError as exc:
            logger.warning("Policy cache write failed for %s: %s", scope, exc)

    def _global_policy(self, requested: str) -> dict[str, Any]:
        cached = self._cache_get(GLOBAL_SCOPE)
        if cached is not None:
            return json.loads(cached)
        item = self._get_item(GLOBAL_SCOPE)
        if item is None:
            raise PolicyNotFoundError(f"No HR policy for scope={requested!r} and no GLOBAL fallback")
        self._cache_set(GLOBAL_SCOPE, json.dumps(item))
        return item

    def get_policy(self, scope: str) -> dict[str, Any]:
        """Scoped policy item, else GLOBAL.

        A scope served by the fallback is cached as a marker pointing at
        GLOBAL, so a later put_policy("GLOBAL") reaches it too.
        """
        if scope == GLOBAL_SCOPE:
            return self._global_policy(scope)

        cached = self._cache_get(scope)
        if cached == FALLBACK_MARKER:
            return self._global_policy(scope)
        if cached is not None:
            return json.loads(cached)

        item = self._get_item(scope)
        if item is None:
            self._cache_set(scope, FALLBACK_MARKER)
            return self._global_policy(scope)
        self._cache_set(scope, json.dumps(item))
        return item

    def put_policy(self, scope: str, policy: dict[str, Any]) -> None:
        self._ddb.Table(self.table_name).put_item(Item=encode_policy_item(scope, policy))
        if self._cache is not None:
            self._cache.delete(f"policy:{scope}")
