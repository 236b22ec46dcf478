"""Tests for the per-league learning portfolio book."""

import sys
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

sys.path.append("src")

from flit.exceptions import NotFoundError, ValidationException
from flit.portfolio import PortfolioBook, TimeFrame

NOW = datetime(2025, 11, 10, 12, 0)


@pytest.fixture
def book():
    return PortfolioBook.from_seed(mode="recompute")


class TestSeededBook:
    def test_seed_portfolios_are_reconciled(self, book):
        portfolio = book.get_portfolio("league-1")

        # 2450 + 850 + holdings 3018.77 + allocation 7000
        assert portfolio.total_value == Decimal("13318.77")
        assert book.selected_league_id == "league-1"

    def test_increment_mode_keeps_seed_totals(self):
        book = PortfolioBook.from_seed(mode="increment")

        assert book.get_portfolio("league-1").total_value == Decimal("11234.56")

    def test_lookups(self, book):
        assert book.has_portfolio("league-2")
        assert book.get_portfolio_by_league("league-9") is None
        with pytest.raises(NotFoundError):
            book.get_portfolio("league-9")

    def test_select_league(self, book):
        book.select_league("league-2")

        assert book.get_current_portfolio().league_id == "league-2"
        with pytest.raises(NotFoundError):
            book.select_league("league-9")


class TestEnsurePortfolio:
    def test_default_portfolio(self, book):
        portfolio = book.ensure_portfolio_exists("league-3")

        assert portfolio.liquid_funds == Decimal("5000")
        assert portfolio.lesson_rewards == Decimal("500")
        assert portfolio.total_value == Decimal("5500")
        assert portfolio.holdings == []
        assert portfolio.allocation.total == Decimal("0")

    def test_default_total_in_increment_mode(self):
        book = PortfolioBook(mode="increment")

        assert book.ensure_portfolio_exists("league-3").total_value == Decimal("10000")
        assert book.selected_league_id == "league-3"

    def test_existing_portfolio_is_returned(self, book):
        assert book.ensure_portfolio_exists("league-1") is book.get_portfolio("league-1")

    def test_empty_book_has_no_current_portfolio(self):
        with pytest.raises(ValidationException):
            PortfolioBook().get_current_portfolio()


class TestTrading:
    def test_buy_existing_holding(self, book):
        stock = book.find_stock("aapl")

        portfolio = book.buy_stock("league-1", stock, 2)

        holding = portfolio.find_holding("AAPL")
        assert holding.shares == Decimal("7")
        assert portfolio.lesson_rewards == Decimal("493.36")
        assert portfolio.total_value == portfolio.components_total

    def test_allocate(self, book):
        portfolio = book.allocate_funds("league-2", "bonds", 200)

        assert portfolio.allocation.bonds == Decimal("1700.00")
        assert portfolio.liquid_funds == Decimal("1000.00")

    def test_search_stocks(self, book):
        assert [s.symbol for s in book.search_stocks("micro")] == ["MSFT"]
        assert len(book.search_stocks()) == 10
        assert book.find_stock("ZZZZ") is None


class TestHistory:
    def test_history_is_stable_and_anchored(self, book):
        start = NOW - timedelta(days=40)

        first = book.history_for("league-1", 10000, start, now=NOW)
        second = book.history_for("league-1", 10000, start, now=NOW)

        assert [p.value for p in first] == [p.value for p in second]
        assert first[-1].value == float(book.get_portfolio("league-1").total_value)

    def test_history_follows_time_frame(self, book):
        book.set_time_frame("1W")

        series = book.history_for("league-1", 10000, NOW - timedelta(days=40), now=NOW)

        assert book.time_frame == TimeFrame.ONE_WEEK
        assert all(p.timestamp >= NOW - timedelta(days=7) for p in series)
        assert len(book.get_portfolio("league-1").history) > len(series)

    def test_market_baseline(self, book):
        baseline = book.market_baseline(30, now=NOW)

        assert len(baseline) == 31
        assert baseline == book.market_baseline(30, now=NOW)
