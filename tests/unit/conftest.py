"""Unit test fixtures."""

from __future__ import annotations

import pytest

from hrcore.models.entities import Snapshot
from tests.fakes import sample_data


@pytest.fixture
def snapshot() -> Snapshot:
    return sample_data.snapshot()
