"""Filter dataclasses and query builders for service layer."""

from dataclasses import dataclass

from sqlalchemy import desc, or_
from sqlalchemy.orm import Query

from ledgerly.models import Item, ItemStatus

LIKE_ESCAPE = "\\"


@dataclass
class ItemFilter:
    """Filter criteria for item queries."""

    status: ItemStatus | None = None
    search: str | None = None

    @property
    def search_term(self) -> str | None:
        """Search text as given, None if missing or whitespace only."""
        if self.search is None or not self.search.strip():
            return None
        return self.search


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def apply_item_filters(query: Query, filters: ItemFilter) -> Query:
    """Apply ItemFilter criteria to a query."""
    if filters.status is not None:
        query = query.filter(Item.status == ItemStatus(filters.status).value)

    term = filters.search_term
    if term:
        search_pattern = f"%{escape_like(term)}%"
        query = query.filter(
            or_(
                Item.identifier.ilike(search_pattern, escape=LIKE_ESCAPE),
                Item.category.ilike(search_pattern, escape=LIKE_ESCAPE),
                Item.notes.ilike(search_pattern, escape=LIKE_ESCAPE),
            )
        )

    return query


def apply_item_sorting(query: Query) -> Query:
    """Most recently touched first; id breaks ties."""
    return query.order_by(desc(Item.updated_at), desc(Item.id))
