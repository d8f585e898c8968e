"""Financial summary aggregation across all items."""

from dataclasses import dataclass, field
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from ledgerly.models import STATUS_VALUES, Item, ItemStatus, Transaction


@dataclass
class StatusCounts:
    """Number of items currently in each status."""

    watchlist: int = 0
    purchased: int = 0
    sold: int = 0
    losses: int = 0


@dataclass
class FinancialSummary:
    """Aggregate financial metrics for the whole inventory."""

    total_spent: Decimal
    total_earned: Decimal
    total_lost: Decimal
    net_profit: Decimal  # realized: sold margins minus written-off capital
    potential_revenue: Decimal
    counts: StatusCounts = field(default_factory=StatusCounts)


def get_summary(db: Session) -> FinancialSummary:
    """
    Compute summary metrics with aggregate queries.

    Each figure comes from its own query; no snapshot isolation is taken
    across them. Null prices count as zero.
    """
    total_spent = _as_decimal(
        db.query(func.sum(Transaction.buy_price)).scalar()
    )
    total_earned = _as_decimal(
        db.query(func.sum(Transaction.sell_price)).scalar()
    )
    total_lost = _as_decimal(
        db.query(func.sum(Transaction.buy_price))
        .select_from(Transaction)
        .join(Transaction.item)
        .filter(Item.status == ItemStatus.LOSSES.value)
        .scalar()
    )
    sold_margin = _as_decimal(
        db.query(
            func.sum(
                func.coalesce(Transaction.sell_price, 0)
                - func.coalesce(Transaction.buy_price, 0)
            )
        )
        .select_from(Transaction)
        .join(Transaction.item)
        .filter(Item.status == ItemStatus.SOLD.value)
        .scalar()
    )
    potential_revenue = _as_decimal(
        db.query(func.sum(Item.potential_income))
        .filter(Item.status == ItemStatus.PURCHASED.value)
        .scalar()
    )

    return FinancialSummary(
        total_spent=total_spent,
        total_earned=total_earned,
        total_lost=total_lost,
        net_profit=sold_margin - total_lost,
        potential_revenue=potential_revenue,
        counts=get_status_counts(db),
    )


def get_status_counts(db: Session) -> StatusCounts:
    """Count items per status; statuses with no items report zero."""
    rows = db.query(Item.status, func.count(Item.id)).group_by(Item.status).all()
    counts = StatusCounts()
    for status, count in rows:
        if status in STATUS_VALUES:
            setattr(counts, status, count)
    return counts


def _as_decimal(value) -> Decimal:
    """Normalize an aggregate result (None, int, float or Decimal) to Decimal."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
