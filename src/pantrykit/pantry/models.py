"""Pantry item records and their persisted JSON form."""

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pantrykit.logging_config import get_logger

logger = get_logger(__name__)


class PantryItem(BaseModel):
    """An inventory record identified by case-insensitive name plus exact unit."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    quantity: float = Field(ge=0, allow_inf_nan=False)
    unit: str
    updated_at: datetime = Field(alias="updatedAt")

    def matches(self, name: str, unit: str) -> bool:
        """Check whether this item has the given identity key."""
        return self.name.lower() == name.lower() and self.unit == unit


def encode_pantry(items: list[PantryItem]) -> bytes:
    """Serialize the full pantry list as a UTF-8 JSON array."""
    payload = [item.model_dump(mode="json", by_alias=True) for item in items]
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def decode_pantry(raw: bytes | str | None) -> list[PantryItem]:
    """
    Deserialize a stored pantry payload.

    Missing, undecodable or non-array payloads read as an empty list. Records
    that fail validation are skipped so one bad entry does not discard the rest.
    """
    if not raw:
        return []

    try:
        data: Any = json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.warning(f"Discarding undecodable pantry payload: {e}")
        return []

    if not isinstance(data, list):
        logger.warning(f"Discarding pantry payload of type {type(data).__name__}")
        return []

    items: list[PantryItem] = []
    for index, record in enumerate(data):
        try:
            items.append(PantryItem.model_validate(record))
        except ValidationError as e:
            logger.warning(f"Skipping invalid pantry record {index}: {e.error_count()} error(s)")
    return items
