"""Planning helpers built on the pantry."""

from pantrykit.plan.shopping_list import (
    Requirement,
    Shortfall,
    ShortfallReport,
    UnquantifiedItem,
    compute_shortfalls,
)

__all__ = [
    "Requirement",
    "Shortfall",
    "ShortfallReport",
    "UnquantifiedItem",
    "compute_shortfalls",
]
