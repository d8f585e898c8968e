"""Pure calculation functions for per-item profit metrics."""

from decimal import Decimal
from typing import TYPE_CHECKING

from ledgerly.models.item import ItemStatus

if TYPE_CHECKING:
    from ledgerly.models import Item


def realized_profit(item: "Item") -> Decimal | None:
    """
    Profit realized on a closed item.

    Sold: sell_price - buy_price. Losses: the buy price written off, as a
    negative amount. Open items (watchlist, purchased) have no realized profit.
    """
    buy = item.buy_price or Decimal("0")
    if item.status == ItemStatus.SOLD.value:
        return (item.sell_price or Decimal("0")) - buy
    if item.status == ItemStatus.LOSSES.value:
        return -buy
    return None


def expected_margin(item: "Item") -> Decimal | None:
    """Estimated resale margin for a held item (potential_income - buy_price)."""
    if item.status != ItemStatus.PURCHASED.value:
        return None
    if item.potential_income is None or item.buy_price is None:
        return None
    return item.potential_income - item.buy_price


def margin_percent(item: "Item") -> Decimal | None:
    """Realized profit as a percentage of the buy price."""
    profit = realized_profit(item)
    if profit is None or not item.buy_price:
        return None
    return profit / item.buy_price * 100
