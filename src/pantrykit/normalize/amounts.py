"""Parsing and building of ingredient amount strings."""

import math
import re
from dataclasses import dataclass

from pantrykit.normalize.units import (
    COMPACT_UNIT_SUFFIXES,
    COUNT_UNIT,
    CUSTOM_UNIT,
    FREE_TEXT_UNIT_TOKENS,
    known_unit_values,
)

_NUMBER = r"[0-9]+(?:\.[0-9]+)?"
_NUMBER_RE = re.compile(_NUMBER)


def _alternation(tokens: tuple[str, ...]) -> str:
    # Longest first so "kg" is not read as "k" + "g" and "cloves" beats "clove".
    return "|".join(re.escape(token) for token in sorted(tokens, key=len, reverse=True))


_COMPACT_RE = re.compile(rf"^{_NUMBER}({_alternation(COMPACT_UNIT_SUFFIXES)})")
_STRUCTURED_RE = re.compile(r"^([0-9]+/[0-9]+|[0-9]+(?:\.[0-9]+)?)\s*(.*)$", re.DOTALL)


@dataclass
class ParsedAmount:
    """Best-effort result of reading a free-text amount."""

    quantity: float | None
    unit: str | None


@dataclass
class StructuredAmount:
    """Editable amount split into quantity text, unit token and custom unit."""

    quantity: str
    unit: str
    custom_unit: str | None = None


# =============================================================================
# Unit rules
# =============================================================================


@dataclass(frozen=True)
class UnitRule:
    """A named pattern that reads a unit token from the start of a remainder."""

    name: str
    pattern: re.Pattern[str]

    def match(self, text: str) -> str | None:
        found = self.pattern.match(text)
        return found.group(1) if found else None


UNIT_RULES: tuple[UnitRule, ...] = (
    UnitRule(
        "known-token",
        re.compile(rf"({_alternation(FREE_TEXT_UNIT_TOKENS)})(?![^\W\d_])", re.IGNORECASE),
    ),
    UnitRule("letter-run", re.compile(r"([^\W\d_]+)")),
)


def match_unit(remainder: str, rules: tuple[UnitRule, ...] = UNIT_RULES) -> str | None:
    """Return the unit token produced by the first matching rule, if any."""
    for rule in rules:
        token = rule.match(remainder)
        if token:
            return token
    return None


# =============================================================================
# Free-text parser
# =============================================================================


def parse_amount(raw: str | None) -> ParsedAmount:
    """
    Parse a free-text amount into a quantity and lower-cased unit.

    Never raises: text without a number yields ``ParsedAmount(None, None)``,
    and a number without a recognisable unit defaults to ``"each"``.

    Examples:
        "2.5 kg" -> (2.5, "kg")
        "500g" -> (500.0, "g")
        "3x" -> (3.0, "x")
        "a pinch" -> (None, None)
    """
    if not raw:
        return ParsedAmount(quantity=None, unit=None)

    trimmed = raw.strip()
    number_match = _NUMBER_RE.search(trimmed)
    if not number_match:
        return ParsedAmount(quantity=None, unit=None)

    quantity: float | None = float(number_match.group(0))
    if not math.isfinite(quantity):
        quantity = None

    unit: str | None = None
    remainder = trimmed[number_match.end():].strip()
    if remainder:
        unit = match_unit(remainder)
    else:
        compact = _COMPACT_RE.match(trimmed)
        if compact:
            unit = compact.group(1)

    return ParsedAmount(quantity=quantity, unit=(unit or COUNT_UNIT).lower())


# =============================================================================
# Builder and unit-aware parser
# =============================================================================


def build_amount(
    quantity: str | None = None,
    unit: str | None = None,
    custom_unit: str | None = None,
) -> str:
    """
    Combine quantity, unit and optional custom unit into a display string.

    A blank quantity gives an empty string; counts (``"each"`` or no unit)
    render as the bare quantity.
    """
    qty = (quantity or "").strip()
    unit_token = (unit or "").strip()
    custom = (custom_unit or "").strip()

    if not qty:
        return ""
    if not unit_token or unit_token == COUNT_UNIT:
        return qty

    final_unit = custom if unit_token == CUSTOM_UNIT else unit_token
    return f"{qty} {final_unit}" if final_unit else qty


def parse_structured_amount(text: str | None) -> StructuredAmount:
    """
    Split a built amount back into its editable parts.

    A remainder that exactly equals a known unit value is kept as that unit;
    any other remainder becomes a custom unit.
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return StructuredAmount(quantity="", unit=COUNT_UNIT)

    match = _STRUCTURED_RE.match(trimmed)
    if not match:
        return StructuredAmount(quantity=trimmed, unit=COUNT_UNIT)

    quantity = match.group(1)
    rest = match.group(2).strip()
    if not rest:
        return StructuredAmount(quantity=quantity, unit=COUNT_UNIT)
    if rest in known_unit_values():
        return StructuredAmount(quantity=quantity, unit=rest)
    return StructuredAmount(quantity=quantity, unit=CUSTOM_UNIT, custom_unit=rest)
