"""Tests for summary service."""

from decimal import Decimal

from ledgerly.models import Item, ItemStatus
from ledgerly.services import item_service, summary_service
from ledgerly.services.summary_service import FinancialSummary, StatusCounts


def make_purchased(db_session, identifier: str, buy: str, potential: str | None = None) -> Item:
    item = item_service.create_watchlist_item(db_session, identifier)
    return item_service.purchase_item(db_session, item.id, buy, potential)


class TestGetSummary:
    def test_empty_database(self, db_session):
        result = summary_service.get_summary(db_session)

        assert isinstance(result, FinancialSummary)
        assert result.total_spent == Decimal("0")
        assert result.total_earned == Decimal("0")
        assert result.total_lost == Decimal("0")
        assert result.net_profit == Decimal("0")
        assert result.potential_revenue == Decimal("0")
        assert result.counts == StatusCounts()

    def test_purchase_then_sell_scenario(self, db_session):
        """Watchlist -> purchase(90, 150) -> sell(140)."""
        item = item_service.create_watchlist_item(db_session, "A", expected_price="100")
        item_service.purchase_item(db_session, item.id, "90", "150")

        result = summary_service.get_summary(db_session)
        assert result.total_spent == Decimal("90")
        assert result.potential_revenue == Decimal("150")
        assert result.counts.purchased == 1
        assert result.counts.watchlist == 0

        item_service.sell_item(db_session, item.id, "140")

        result = summary_service.get_summary(db_session)
        assert result.total_earned == Decimal("140")
        assert result.net_profit == Decimal("50")
        assert result.potential_revenue == Decimal("0")
        assert result.counts.sold == 1
        assert result.counts.purchased == 0

    def test_loss_scenario(self, db_session):
        item = make_purchased(db_session, "B", "50")
        item_service.report_loss(db_session, item.id, "Banned")

        result = summary_service.get_summary(db_session)

        assert result.total_lost == Decimal("50")
        assert result.counts.losses == 1
        assert item_service.require_item(db_session, item.id).loss_reason == "Banned"

    def test_sell_moves_earned_and_counts(self, db_session):
        item = make_purchased(db_session, "A", "30")
        make_purchased(db_session, "Other", "10")
        before = summary_service.get_summary(db_session)

        item_service.sell_item(db_session, item.id, "45")

        after = summary_service.get_summary(db_session)
        assert after.total_earned - before.total_earned == Decimal("45")
        assert after.counts.sold == before.counts.sold + 1
        assert after.counts.purchased == before.counts.purchased - 1

    def test_loss_lowers_net_profit_by_buy_price(self, db_session):
        sold = make_purchased(db_session, "Winner", "20")
        item_service.sell_item(db_session, sold.id, "70")
        item = make_purchased(db_session, "Loser", "35")
        before = summary_service.get_summary(db_session)

        item_service.report_loss(db_session, item.id, "Recovered by original owner")

        after = summary_service.get_summary(db_session)
        assert after.total_lost - before.total_lost == Decimal("35")
        assert before.net_profit - after.net_profit == Decimal("35")
        assert after.net_profit == Decimal("15")

    def test_net_profit_ignores_open_purchases(self, db_session):
        """Realized profit differs from earned - spent while capital is still held."""
        sold = make_purchased(db_session, "A", "90")
        item_service.sell_item(db_session, sold.id, "140")
        make_purchased(db_session, "Held", "60", "100")

        result = summary_service.get_summary(db_session)

        naive = result.total_earned - result.total_spent
        assert result.net_profit == Decimal("50")
        assert naive == Decimal("-10")
        assert result.net_profit != naive

    def test_delete_excludes_contribution(self, db_session):
        keep = make_purchased(db_session, "Keep", "10", "20")
        drop = make_purchased(db_session, "Drop", "40", "80")
        item_service.sell_item(db_session, drop.id, "90")

        item_service.delete_item(db_session, drop.id)

        result = summary_service.get_summary(db_session)
        assert result.total_spent == Decimal("10")
        assert result.total_earned == Decimal("0")
        assert result.net_profit == Decimal("0")
        assert result.potential_revenue == Decimal("20")
        assert result.counts == StatusCounts(purchased=1)
        assert keep.id in [i.id for i in item_service.get_items(db_session)]

    def test_potential_revenue_skips_missing_estimates(self, db_session):
        make_purchased(db_session, "No estimate", "10")
        make_purchased(db_session, "Estimate", "10", "25")

        result = summary_service.get_summary(db_session)
        assert result.potential_revenue == Decimal("25")


class TestGetStatusCounts:
    def test_counts_every_status(self, db_session):
        item_service.create_watchlist_item(db_session, "W1")
        item_service.create_watchlist_item(db_session, "W2")
        make_purchased(db_session, "P", "5")
        sold = make_purchased(db_session, "S", "5")
        item_service.sell_item(db_session, sold.id, "8")
        lost = make_purchased(db_session, "L", "5")
        item_service.report_loss(db_session, lost.id, "Locked")

        counts = summary_service.get_status_counts(db_session)

        assert counts == StatusCounts(watchlist=2, purchased=1, sold=1, losses=1)
        assert db_session.query(Item).filter(Item.status == ItemStatus.SOLD.value).count() == 1
