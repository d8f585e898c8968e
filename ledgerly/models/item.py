from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ledgerly.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from ledgerly.models.transaction import Transaction


class ItemStatus(str, Enum):
    """Lifecycle status of a tracked item."""

    WATCHLIST = "watchlist"
    PURCHASED = "purchased"
    SOLD = "sold"
    LOSSES = "losses"


STATUS_VALUES = tuple(status.value for status in ItemStatus)


class Item(Base, TimestampMixin):
    """Tracked asset moving through watchlist -> purchased -> sold/losses."""

    # Table keeps the historical "accounts" name
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint(
            f"status IN ({', '.join(repr(v) for v in STATUS_VALUES)})",
            name="ck_accounts_status",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    identifier: Mapped[str] = mapped_column(String(255), index=True)
    link: Mapped[str | None] = mapped_column(String(2048), index=True)
    category: Mapped[str | None] = mapped_column(String(100), index=True)
    thumbnail_url: Mapped[str | None] = mapped_column(String(2048))
    notes: Mapped[str | None] = mapped_column(Text)

    status: Mapped[str] = mapped_column(
        String(20),
        default=ItemStatus.WATCHLIST.value,
        server_default=ItemStatus.WATCHLIST.value,
        index=True,
    )
    expected_price: Mapped[Decimal | None] = mapped_column(Numeric(18, 4))
    potential_income: Mapped[Decimal | None] = mapped_column(Numeric(18, 4))
    loss_reason: Mapped[str | None] = mapped_column(Text)

    # Opaque credential data stored alongside the item
    email: Mapped[str | None] = mapped_column(String(255))
    password: Mapped[str | None] = mapped_column(String(255))
    account_email: Mapped[str | None] = mapped_column(String(255))
    account_password: Mapped[str | None] = mapped_column(String(255))
    account_2nd_email: Mapped[str | None] = mapped_column(String(255))
    account_2nd_password: Mapped[str | None] = mapped_column(String(255))

    # Relationships
    transaction: Mapped[Optional["Transaction"]] = relationship(
        back_populates="item", uselist=False, cascade="all, delete-orphan"
    )

    @property
    def buy_price(self) -> Decimal | None:
        return self.transaction.buy_price if self.transaction else None

    @property
    def sell_price(self) -> Decimal | None:
        return self.transaction.sell_price if self.transaction else None

    @property
    def transaction_date(self) -> datetime | None:
        return self.transaction.transaction_date if self.transaction else None
