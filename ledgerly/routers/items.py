from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ledgerly.calculations import expected_margin, margin_percent, realized_profit
from ledgerly.database import get_db
from ledgerly.models import Item, ItemStatus
from ledgerly.schemas import (
    DeleteOut,
    DuplicateCheckOut,
    ItemCreate,
    ItemOut,
    ItemPatch,
    LossIn,
    PurchaseIn,
    SellIn,
)
from ledgerly.services import item_service
from ledgerly.services.filters import ItemFilter

router = APIRouter()


def to_item_out(item: Item) -> ItemOut:
    """Serialize an item with its joined transaction and computed metrics."""
    out = ItemOut.model_validate(item)
    profit = realized_profit(item)
    margin = expected_margin(item)
    percent = margin_percent(item)
    out.realized_profit = float(profit) if profit is not None else None
    out.expected_margin = float(margin) if margin is not None else None
    out.margin_percent = float(percent) if percent is not None else None
    return out


@router.get("", response_model=list[ItemOut])
def list_items(
    db: Session = Depends(get_db),
    status_filter: ItemStatus | None = Query(None, alias="status"),
    search: str | None = Query(None, description="Case-insensitive substring"),
) -> list[ItemOut]:
    """List items, optionally filtered by status and search text."""
    items = item_service.get_items(db, ItemFilter(status=status_filter, search=search))
    return [to_item_out(item) for item in items]


@router.post("", response_model=ItemOut, status_code=status.HTTP_201_CREATED)
def create_item(payload: ItemCreate, db: Session = Depends(get_db)) -> ItemOut:
    """Add an item to the watchlist."""
    item = item_service.create_watchlist_item(
        db,
        identifier=payload.identifier,
        link=payload.link,
        category=payload.category,
        expected_price=payload.expected_price,
        notes=payload.notes,
        thumbnail_url=payload.thumbnail_url,
    )
    return to_item_out(item)


@router.get("/check-duplicate", response_model=DuplicateCheckOut)
def check_duplicate(
    db: Session = Depends(get_db),
    link: str = Query(..., description="Item link to look up"),
) -> DuplicateCheckOut:
    """Check whether an item with this link already exists."""
    result = item_service.check_duplicate_link(db, link)
    return DuplicateCheckOut(
        exists=result.exists, item_id=result.item_id, identifier=result.identifier
    )


@router.get("/{item_id}", response_model=ItemOut)
def get_item(item_id: int, db: Session = Depends(get_db)) -> ItemOut:
    """Get a single item with its transaction."""
    return to_item_out(item_service.require_item(db, item_id))


@router.patch("/{item_id}", response_model=ItemOut)
def update_item(
    item_id: int, payload: ItemPatch, db: Session = Depends(get_db)
) -> ItemOut:
    """Edit item details without changing its status."""
    changes = item_service.ItemUpdate(**payload.model_dump())
    return to_item_out(item_service.update_item(db, item_id, changes))


@router.delete("/{item_id}", response_model=DeleteOut)
def delete_item(item_id: int, db: Session = Depends(get_db)) -> DeleteOut:
    """Delete an item and its transaction. Unknown ids are not an error."""
    deleted = item_service.delete_item(db, item_id)
    return DeleteOut(deleted=deleted)


@router.post("/{item_id}/purchase", response_model=ItemOut)
def purchase_item(
    item_id: int, payload: PurchaseIn, db: Session = Depends(get_db)
) -> ItemOut:
    """Buy the item, or update the buy price of an already purchased one."""
    item = item_service.purchase_item(
        db, item_id, payload.buy_price, payload.potential_income
    )
    return to_item_out(item)


@router.post("/{item_id}/sell", response_model=ItemOut)
def sell_item(item_id: int, payload: SellIn, db: Session = Depends(get_db)) -> ItemOut:
    """Mark a purchased item as sold."""
    return to_item_out(item_service.sell_item(db, item_id, payload.sell_price))


@router.post("/{item_id}/loss", response_model=ItemOut)
def report_loss(item_id: int, payload: LossIn, db: Session = Depends(get_db)) -> ItemOut:
    """Write off a purchased item with a loss reason."""
    return to_item_out(item_service.report_loss(db, item_id, payload.loss_reason))
