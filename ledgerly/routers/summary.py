"""Router for the financial summary."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ledgerly.database import get_db
from ledgerly.schemas import StatusCountsOut, SummaryOut
from ledgerly.services.summary_service import get_summary

router = APIRouter()


@router.get("", response_model=SummaryOut)
def summary(db: Session = Depends(get_db)) -> SummaryOut:
    """Totals, realized profit and per-status counts across all items."""
    result = get_summary(db)
    return SummaryOut(
        total_spent=float(result.total_spent),
        total_earned=float(result.total_earned),
        total_lost=float(result.total_lost),
        net_profit=float(result.net_profit),
        potential_revenue=float(result.potential_revenue),
        counts=StatusCountsOut(
            watchlist=result.counts.watchlist,
            purchased=result.counts.purchased,
            sold=result.counts.sold,
            losses=result.counts.losses,
        ),
    )
