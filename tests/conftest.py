"""Pytest configuration and shared fixtures."""

import json
from datetime import UTC, datetime

import pytest

from pantrykit.pantry.aggregator import PantryAggregator
from pantrykit.pantry.store import InMemoryKeyValueStore

# =============================================================================
# Clock Fixtures
# =============================================================================

FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)


class StepClock:
    """Clock returning one-second increments, so refreshed timestamps are visible."""

    def __init__(self, start: datetime = FIXED_NOW):
        self.current = start
        self.calls = 0

    def __call__(self) -> datetime:
        value = self.current.replace(second=self.calls % 60)
        self.calls += 1
        return value


@pytest.fixture
def clock():
    """Deterministic clock for audit timestamps."""
    return StepClock()


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def memory_store():
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def aggregator(memory_store, clock):
    """Pantry aggregator over the in-memory store."""
    return PantryAggregator(memory_store, clock=clock)


@pytest.fixture
def stored_pantry_payload():
    """Pantry payload with millisecond camelCase timestamps, as older clients wrote it."""
    return json.dumps(
        [
            {
                "name": "Rice",
                "quantity": 2,
                "unit": "kg",
                "updatedAt": "2026-10-01T08:30:00.000Z",
            },
            {
                "name": "Pasta",
                "quantity": 500,
                "unit": "g",
                "updatedAt": "2026-10-02T09:15:00.000Z",
            },
        ]
    ).encode("utf-8")
