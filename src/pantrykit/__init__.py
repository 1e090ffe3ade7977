"""Ingredient amount parsing and pantry inventory aggregation."""

__version__ = "0.1.0"
