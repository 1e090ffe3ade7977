"""Parse, build and format ingredient amounts against a fixed unit vocabulary."""

from pantrykit.normalize.amounts import (
    ParsedAmount,
    StructuredAmount,
    UnitRule,
    build_amount,
    match_unit,
    parse_amount,
    parse_structured_amount,
)
from pantrykit.normalize.formatting import format_quantity
from pantrykit.normalize.units import (
    UNIT_OPTIONS,
    UnitGroup,
    UnitOption,
    get_unit_option,
    known_unit_values,
    options_by_group,
)

__all__ = [
    "UNIT_OPTIONS",
    "ParsedAmount",
    "StructuredAmount",
    "UnitGroup",
    "UnitOption",
    "UnitRule",
    "build_amount",
    "format_quantity",
    "get_unit_option",
    "known_unit_values",
    "match_unit",
    "options_by_group",
    "parse_amount",
    "parse_structured_amount",
]
