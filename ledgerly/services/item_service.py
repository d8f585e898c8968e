"""Item lifecycle: creation, status transitions, edits and deletion."""

import logging
from dataclasses import dataclass, fields
from datetime import timedelta
from decimal import Decimal, InvalidOperation

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ledgerly.exceptions import InvalidStateError, NotFoundError, ValidationError
from ledgerly.models import Item, ItemStatus, Transaction
from ledgerly.models.base import utcnow
from ledgerly.services.filters import ItemFilter, apply_item_filters, apply_item_sorting

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = (ItemStatus.SOLD.value, ItemStatus.LOSSES.value)

# Free-text fields that are trimmed, with blank stored as NULL
DESCRIPTIVE_FIELDS = ("link", "category", "thumbnail_url", "notes")
PRICE_FIELDS = ("expected_price", "potential_income")


@dataclass
class ItemUpdate:
    """Editable item fields. None leaves a field unchanged."""

    identifier: str | None = None
    link: str | None = None
    category: str | None = None
    thumbnail_url: str | None = None
    notes: str | None = None
    expected_price: Decimal | float | str | None = None
    potential_income: Decimal | float | str | None = None
    email: str | None = None
    password: str | None = None
    account_email: str | None = None
    account_password: str | None = None
    account_2nd_email: str | None = None
    account_2nd_password: str | None = None


@dataclass
class DuplicateCheck:
    """Result of looking up an item by link."""

    exists: bool
    item_id: int | None = None
    identifier: str | None = None


def get_items(db: Session, filters: ItemFilter | None = None) -> list[Item]:
    """
    List items with their transactions, most recently updated first.

    Filters by status when given and by a case-insensitive substring of
    identifier, category or notes when a search term is given.
    """
    query = db.query(Item).options(joinedload(Item.transaction))
    if filters is not None:
        query = apply_item_filters(query, filters)
    return apply_item_sorting(query).all()


def get_item(db: Session, item_id: int) -> Item | None:
    """Get a single item (with its transaction) by ID."""
    return (
        db.query(Item)
        .options(joinedload(Item.transaction))
        .filter(Item.id == item_id)
        .first()
    )


def require_item(db: Session, item_id: int) -> Item:
    """Get a single item by ID or raise NotFoundError."""
    item = get_item(db, item_id)
    if item is None:
        raise NotFoundError("Item", item_id)
    return item


def check_duplicate_link(db: Session, link: str | None) -> DuplicateCheck:
    """Report whether an item with this link is already tracked."""
    link = _clean_text(link)
    if link is None:
        return DuplicateCheck(exists=False)

    existing = (
        db.query(Item).filter(Item.link == link).order_by(Item.id).first()
    )
    if existing is None:
        return DuplicateCheck(exists=False)
    return DuplicateCheck(
        exists=True, item_id=existing.id, identifier=existing.identifier
    )


def create_watchlist_item(
    db: Session,
    identifier: str,
    link: str | None = None,
    category: str | None = None,
    expected_price: Decimal | float | str | None = None,
    notes: str | None = None,
    thumbnail_url: str | None = None,
) -> Item:
    """Create a new item on the watchlist. No transaction is created yet."""
    now = utcnow()
    item = Item(
        identifier=_require_text(identifier, "identifier"),
        link=_clean_text(link),
        category=_clean_text(category),
        thumbnail_url=_clean_text(thumbnail_url),
        notes=_clean_text(notes),
        expected_price=_parse_price(expected_price, "expected_price"),
        status=ItemStatus.WATCHLIST.value,
        created_at=now,
        updated_at=now,
    )
    db.add(item)
    _commit(db)
    db.refresh(item)
    logger.info("Created watchlist item %s (%s)", item.id, item.identifier)
    return item


def purchase_item(
    db: Session,
    item_id: int,
    buy_price: Decimal | float | str,
    potential_income: Decimal | float | str | None = None,
) -> Item:
    """
    Mark an item as purchased and record its buy price.

    The transaction row is created on the first purchase and overwritten on
    later ones, so an item never has more than one.
    """
    item = require_item(db, item_id)
    if item.status in TERMINAL_STATUSES:
        _reject(item, "purchase")

    buy = _parse_price(buy_price, "buy_price", required=True)
    potential = _parse_price(potential_income, "potential_income")

    now = utcnow()
    item.status = ItemStatus.PURCHASED.value
    item.potential_income = potential
    if item.transaction is None:
        item.transaction = Transaction(buy_price=buy, transaction_date=now)
    else:
        item.transaction.buy_price = buy
        item.transaction.transaction_date = now
    _touch(item)

    _commit(db)
    db.refresh(item)
    logger.info("Purchased item %s for %s", item.id, buy)
    return item


def sell_item(db: Session, item_id: int, sell_price: Decimal | float | str) -> Item:
    """Mark a purchased item as sold and record the sale price."""
    item = require_item(db, item_id)
    _require_purchased(item, "sell")

    sell = _parse_price(sell_price, "sell_price", required=True)

    item.status = ItemStatus.SOLD.value
    item.transaction.sell_price = sell
    item.transaction.transaction_date = utcnow()
    _touch(item)

    _commit(db)
    db.refresh(item)
    logger.info("Sold item %s for %s", item.id, sell)
    return item


def report_loss(db: Session, item_id: int, reason: str) -> Item:
    """
    Write off a purchased item.

    The buy price stays on the transaction; the losses status alone marks it
    as written off for the summary.
    """
    reason = _require_text(reason, "loss_reason")
    item = require_item(db, item_id)
    _require_purchased(item, "report a loss for")

    item.status = ItemStatus.LOSSES.value
    item.loss_reason = reason
    _touch(item)

    _commit(db)
    db.refresh(item)
    logger.info("Item %s written off: %s", item.id, reason)
    return item


def update_item(db: Session, item_id: int, changes: ItemUpdate) -> Item:
    """
    Patch editable fields. Status is never changed here.

    Blank descriptive fields are cleared; credential fields are stored as given.
    """
    item = require_item(db, item_id)

    updates = {}
    for field in fields(ItemUpdate):
        value = getattr(changes, field.name)
        if value is None:
            continue
        if field.name == "identifier":
            value = _require_text(value, "identifier")
        elif field.name in DESCRIPTIVE_FIELDS:
            value = _clean_text(value)
        elif field.name in PRICE_FIELDS:
            value = _parse_price(value, field.name)
        updates[field.name] = value

    for name, value in updates.items():
        setattr(item, name, value)
    _touch(item)

    _commit(db)
    db.refresh(item)
    return item


def delete_item(db: Session, item_id: int) -> bool:
    """Delete an item and its transaction. Returns True if deleted, False if not found."""
    item = get_item(db, item_id)
    if not item:
        return False
    db.delete(item)
    _commit(db)
    logger.info("Deleted item %s", item_id)
    return True


def _require_purchased(item: Item, operation: str) -> None:
    if item.status != ItemStatus.PURCHASED.value or item.transaction is None:
        _reject(item, operation)


def _reject(item: Item, operation: str) -> None:
    logger.warning("Rejected %s on item %s (status %s)", operation, item.id, item.status)
    raise InvalidStateError(item.id, item.status, operation)


def _touch(item: Item) -> None:
    """Stamp updated_at, always moving it forward."""
    now = utcnow()
    if item.updated_at is not None and now <= item.updated_at:
        now = item.updated_at + timedelta(microseconds=1)
    item.updated_at = now


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def _clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _require_text(value: str | None, field: str) -> str:
    cleaned = _clean_text(value) if isinstance(value, str) else None
    if cleaned is None:
        raise ValidationError(f"{field} must not be empty", field=field)
    return cleaned


def _parse_price(
    value: Decimal | float | str | None, field: str, required: bool = False
) -> Decimal | None:
    """Convert a price to Decimal. Rejects non-numeric, non-finite and negative values."""
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f"{field} is required", field=field)
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", field=field)

    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number", field=field) from None

    if not price.is_finite():
        raise ValidationError(f"{field} must be a finite number", field=field)
    if price < 0:
        raise ValidationError(f"{field} must not be negative", field=field)
    return price
