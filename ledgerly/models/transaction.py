from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledgerly.models.base import Base, utcnow

if TYPE_CHECKING:
    from ledgerly.models.item import Item


class Transaction(Base):
    """Buy/sell record paired one-to-one with an item."""

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"), unique=True, index=True
    )
    buy_price: Mapped[Decimal | None] = mapped_column(Numeric(18, 4))
    sell_price: Mapped[Decimal | None] = mapped_column(Numeric(18, 4))
    transaction_date: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    # Relationships
    item: Mapped["Item"] = relationship(back_populates="transaction")
