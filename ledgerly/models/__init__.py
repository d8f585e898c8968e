from ledgerly.models.base import Base
from ledgerly.models.item import STATUS_VALUES, Item, ItemStatus
from ledgerly.models.transaction import Transaction

__all__ = [
    "Base",
    "Item",
    "ItemStatus",
    "STATUS_VALUES",
    "Transaction",
]
