"""Pantry shortfalls for planned recipe ingredients."""

from dataclasses import dataclass, field

from pantrykit.logging_config import get_logger
from pantrykit.normalize.amounts import parse_amount
from pantrykit.normalize.formatting import format_quantity
from pantrykit.pantry.models import PantryItem

logger = get_logger(__name__)

# Deficits at or below this are float noise, not something to buy.
DEFICIT_EPSILON = 0.0001


@dataclass
class Requirement:
    """An ingredient amount needed by a planned recipe."""

    name: str
    amount: str
    base_serves: float = 4
    target_serves: float = 4

    @property
    def scale_factor(self) -> float:
        """Multiplier from recipe servings to planned servings."""
        if self.base_serves <= 0:
            return 1.0
        return self.target_serves / self.base_serves


@dataclass
class Shortfall:
    """Quantity missing from the pantry for one (name, unit) key."""

    name: str
    unit: str
    quantity: float
    amount: str


@dataclass
class UnquantifiedItem:
    """A needed ingredient whose amounts could not be parsed."""

    name: str
    amounts: list[str] = field(default_factory=list)


@dataclass
class ShortfallReport:
    """Everything still to buy after checking the pantry."""

    shortfalls: list[Shortfall] = field(default_factory=list)
    unquantified: list[UnquantifiedItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.shortfalls and not self.unquantified


def _pantry_key(name: str, unit: str) -> tuple[str, str]:
    return name.lower(), unit


def compute_shortfalls(
    requirements: list[Requirement],
    pantry: list[PantryItem],
) -> ShortfallReport:
    """
    Compare planned requirements against pantry stock.

    Requirements with a parseable amount are scaled to the planned servings
    and summed per (case-insensitive name, unit); the pantry quantity for the
    same key is subtracted and any positive remainder is reported. Amounts
    that cannot be parsed are listed per ingredient name without arithmetic.

    Args:
        requirements: Ingredient amounts needed, in plan order.
        pantry: Current pantry items.

    Returns:
        ShortfallReport ordered by first appearance of each key.
    """
    stock = {_pantry_key(item.name, item.unit): item.quantity for item in pantry}

    required: dict[tuple[str, str], Shortfall] = {}
    unquantified: dict[str, UnquantifiedItem] = {}

    for requirement in requirements:
        name = requirement.name.strip()
        if not name:
            continue

        parsed = parse_amount(requirement.amount)
        if parsed.quantity is not None and parsed.unit:
            key = _pantry_key(name, parsed.unit)
            entry = required.setdefault(
                key, Shortfall(name=name, unit=parsed.unit, quantity=0.0, amount="")
            )
            entry.quantity += parsed.quantity * requirement.scale_factor
            continue

        item = unquantified.setdefault(name.lower(), UnquantifiedItem(name=name))
        if requirement.amount and requirement.amount not in item.amounts:
            item.amounts.append(requirement.amount)

    report = ShortfallReport(unquantified=list(unquantified.values()))
    for key, entry in required.items():
        deficit = entry.quantity - stock.get(key, 0.0)
        if deficit > DEFICIT_EPSILON:
            report.shortfalls.append(
                Shortfall(
                    name=entry.name,
                    unit=entry.unit,
                    quantity=deficit,
                    amount=format_quantity(deficit, entry.unit),
                )
            )

    logger.debug(
        f"Computed {len(report.shortfalls)} shortfall(s) and "
        f"{len(report.unquantified)} unquantified item(s) from {len(requirements)} requirement(s)"
    )
    return report
