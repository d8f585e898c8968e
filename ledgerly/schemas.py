from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from ledgerly.models import ItemStatus


class ItemCreate(BaseModel):
    identifier: str
    link: str | None = None
    category: str | None = None
    thumbnail_url: str | None = None
    expected_price: Decimal | None = None
    notes: str | None = None


class ItemPatch(BaseModel):
    """Editable fields; omitted or null fields are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    identifier: str | None = None
    link: str | None = None
    category: str | None = None
    thumbnail_url: str | None = None
    notes: str | None = None
    expected_price: Decimal | None = None
    potential_income: Decimal | None = None
    email: str | None = None
    password: str | None = None
    account_email: str | None = None
    account_password: str | None = None
    account_2nd_email: str | None = None
    account_2nd_password: str | None = None


class PurchaseIn(BaseModel):
    buy_price: Decimal
    potential_income: Decimal | None = None


class SellIn(BaseModel):
    sell_price: Decimal


class LossIn(BaseModel):
    loss_reason: str


class ItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    identifier: str
    link: str | None = None
    category: str | None = None
    thumbnail_url: str | None = None
    notes: str | None = None
    status: ItemStatus
    expected_price: float | None = None
    potential_income: float | None = None
    loss_reason: str | None = None
    email: str | None = None
    password: str | None = None
    account_email: str | None = None
    account_password: str | None = None
    account_2nd_email: str | None = None
    account_2nd_password: str | None = None
    created_at: datetime
    updated_at: datetime

    # Joined from the transaction
    buy_price: float | None = None
    sell_price: float | None = None
    transaction_date: datetime | None = None

    # Computed
    realized_profit: float | None = None
    expected_margin: float | None = None
    margin_percent: float | None = None


class DuplicateCheckOut(BaseModel):
    exists: bool
    item_id: int | None = None
    identifier: str | None = None


class DeleteOut(BaseModel):
    success: bool = True
    deleted: bool


class StatusCountsOut(BaseModel):
    watchlist: int = 0
    purchased: int = 0
    sold: int = 0
    losses: int = 0


class SummaryOut(BaseModel):
    total_spent: float
    total_earned: float
    total_lost: float
    net_profit: float
    potential_revenue: float
    counts: StatusCountsOut = Field(default_factory=StatusCountsOut)
