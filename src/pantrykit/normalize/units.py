"""Unit vocabulary and token tables for ingredient amounts."""

from dataclasses import dataclass
from enum import Enum


class UnitGroup(str, Enum):
    """Picklist grouping for unit options."""

    COMMON = "Common"
    WEIGHT = "Weight"
    VOLUME = "Volume"
    KITCHEN = "Kitchen"
    OTHER = "Other"


@dataclass(frozen=True)
class UnitOption:
    """A selectable unit with its canonical token and display label."""

    value: str
    label: str
    group: UnitGroup


CUSTOM_UNIT = "custom"
COUNT_UNIT = "each"


# =============================================================================
# Vocabulary
# =============================================================================

UNIT_OPTIONS: tuple[UnitOption, ...] = (
    UnitOption(COUNT_UNIT, "each (count)", UnitGroup.COMMON),
    UnitOption("piece", "piece", UnitGroup.COMMON),
    UnitOption("pack", "pack", UnitGroup.COMMON),
    UnitOption("bottle", "bottle", UnitGroup.COMMON),
    UnitOption("can", "can", UnitGroup.COMMON),
    UnitOption("g", "g", UnitGroup.WEIGHT),
    UnitOption("kg", "kg", UnitGroup.WEIGHT),
    UnitOption("ml", "ml", UnitGroup.VOLUME),
    UnitOption("L", "L", UnitGroup.VOLUME),
    UnitOption("tsp", "tsp", UnitGroup.KITCHEN),
    UnitOption("tbsp", "tbsp", UnitGroup.KITCHEN),
    UnitOption("cup", "cup", UnitGroup.KITCHEN),
    UnitOption("slice", "slice", UnitGroup.KITCHEN),
    UnitOption("clove", "clove", UnitGroup.KITCHEN),
    UnitOption(CUSTOM_UNIT, "Custom…", UnitGroup.OTHER),
)

_OPTIONS_BY_VALUE: dict[str, UnitOption] = {option.value: option for option in UNIT_OPTIONS}


# =============================================================================
# Free-text parser tokens
# =============================================================================

# Unit tokens recognised after a number in free text ("2 cloves", "3x").
FREE_TEXT_UNIT_TOKENS: tuple[str, ...] = (
    "g",
    "kg",
    "ml",
    "l",
    "tbsp",
    "tsp",
    "oz",
    "lb",
    "clove",
    "cloves",
    "cup",
    "cups",
    "each",
    "x",
)

# Suffixes accepted directly after the digits with no separator ("500g").
COMPACT_UNIT_SUFFIXES: tuple[str, ...] = ("g", "kg", "ml", "l", "oz", "lb")


def get_unit_option(value: str) -> UnitOption | None:
    """Look up a unit option by its exact canonical value."""
    return _OPTIONS_BY_VALUE.get(value)


def known_unit_values() -> list[str]:
    """Return every canonical unit value except the custom marker."""
    return [option.value for option in UNIT_OPTIONS if option.value != CUSTOM_UNIT]


def options_by_group() -> dict[UnitGroup, list[UnitOption]]:
    """Group the vocabulary for picklists, preserving table order."""
    grouped: dict[UnitGroup, list[UnitOption]] = {}
    for option in UNIT_OPTIONS:
        grouped.setdefault(option.group, []).append(option)
    return grouped
