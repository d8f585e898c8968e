"""Calculation modules for item profit metrics."""

from ledgerly.calculations.item_calcs import (
    expected_margin,
    margin_percent,
    realized_profit,
)

__all__ = [
    "realized_profit",
    "expected_margin",
    "margin_percent",
]
