"""Pantry inventory aggregation over a key-value store."""

import math
from collections.abc import Callable
from datetime import UTC, datetime

from pantrykit.config import Settings, get_settings
from pantrykit.logging_config import LoggingContext, configure_logging, get_logger
from pantrykit.normalize.formatting import round_quantity
from pantrykit.pantry.models import PantryItem, decode_pantry, encode_pantry
from pantrykit.pantry.store import KeyValueStore, StorageWriteError, create_store

logger = get_logger(__name__)

DEFAULT_PANTRY_KEY = "pantryItems"
QUANTITY_PRECISION = 3


def utc_now() -> datetime:
    """Return the current UTC time."""
    return datetime.now(UTC)


class PantryAggregator:
    """
    Owns the persisted pantry list and merges quantity deltas into it.

    Every write is a full read-modify-write of a single record:
    - Load the list (a missing or corrupt record reads as empty)
    - Adjust or insert the item for (case-insensitive name, exact unit)
    - Drop items whose quantity reached zero
    - Replace the stored record with the result

    There is no locking. Concurrent upserts against the same store must be
    serialized by the caller or the last write wins.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = DEFAULT_PANTRY_KEY,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.key = key
        self.clock = clock

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "PantryAggregator":
        """
        Build an aggregator for an application entry point.

        Configures logging from the same settings, then selects the store
        backend and storage key.
        """
        settings = settings or get_settings()
        configure_logging(settings)
        return cls(create_store(settings), key=settings.pantry_storage_key)

    async def load(self) -> list[PantryItem]:
        """Load the pantry list, treating any read failure as an empty list."""
        try:
            raw = await self.store.get(self.key)
        except Exception as e:
            logger.warning(f"Failed to read pantry from {self.store.name}: {e}")
            return []
        return decode_pantry(raw)

    async def save(self, items: list[PantryItem]) -> None:
        """
        Persist the full pantry list, replacing whatever was stored.

        Raises:
            StorageWriteError: If the store rejects the write.
        """
        payload = encode_pantry(items)
        try:
            await self.store.set(self.key, payload)
        except Exception as e:
            logger.error(f"Failed to write pantry to {self.store.name}: {e}")
            raise StorageWriteError(f"Failed to write pantry: {e}", key=self.key) from e

    async def find(self, name: str, unit: str) -> PantryItem | None:
        """Return the stored item for (name, unit), if present."""
        for item in await self.load():
            if item.matches(name, unit):
                return item
        return None

    async def upsert(self, name: str, delta: float, unit: str) -> list[PantryItem]:
        """
        Adjust the quantity for (name, unit) by a signed delta.

        Args:
            name: Item name, matched case-insensitively.
            delta: Signed quantity change.
            unit: Unit token, matched exactly.

        Returns:
            The pantry list as persisted by this call.

        Raises:
            ValueError: If delta is NaN or infinite.
            StorageWriteError: If the updated list could not be saved.
        """
        if not math.isfinite(delta):
            raise ValueError(f"Quantity delta must be finite, got {delta}")

        with LoggingContext(pantry_key=self.key):
            items = await self.load()
            existing = next((item for item in items if item.matches(name, unit)), None)

            if existing is not None:
                existing.quantity = max(
                    0.0, round_quantity(existing.quantity + delta, QUANTITY_PRECISION)
                )
                existing.updated_at = self.clock()
                logger.debug(f"Adjusted {existing.name} ({unit}) by {delta} to {existing.quantity}")
            elif delta >= 0:
                items.append(
                    PantryItem(
                        name=name,
                        quantity=round_quantity(delta, QUANTITY_PRECISION),
                        unit=unit,
                        updated_at=self.clock(),
                    )
                )
                logger.debug(f"Added {name} ({unit}) with quantity {delta}")
            else:
                logger.debug(f"Ignoring negative delta for missing item {name} ({unit})")

            cleaned = [item for item in items if item.quantity != 0]
            if len(cleaned) < len(items):
                logger.info(f"Pruned {len(items) - len(cleaned)} empty pantry item(s)")

            await self.save(cleaned)
            return cleaned

    async def remove(self, name: str, unit: str) -> list[PantryItem]:
        """Delete the item for (name, unit) and persist the remaining list."""
        with LoggingContext(pantry_key=self.key):
            items = await self.load()
            remaining = [item for item in items if not item.matches(name, unit)]
            await self.save(remaining)
            return remaining

    async def clear(self) -> list[PantryItem]:
        """Empty the pantry."""
        with LoggingContext(pantry_key=self.key):
            logger.info("Clearing pantry")
            await self.save([])
            return []
