"""Tests for fund allocation and stock purchases."""

import sys
from decimal import Decimal

import pytest

sys.path.append("src")

from flit.exceptions import AssetLockedError, InsufficientFundsError, ValidationException
from flit.portfolio import Portfolio, Stock, allocate_funds, buy_stock
from flit.portfolio.valuation import INCREMENT, RECOMPUTE


def make_portfolio(**overrides):
    values = {
        "league_id": "league-1",
        "total_value": Decimal("1500"),
        "liquid_funds": Decimal("500"),
        "lesson_rewards": Decimal("1000"),
    }
    values.update(overrides)
    return Portfolio(**values)


def make_stock(price="178.32", symbol="AAPL", required_lessons=None):
    return Stock(
        symbol=symbol,
        name=f"{symbol} Inc.",
        current_price=Decimal(price),
        required_lessons=required_lessons or [],
    )


class TestAllocateFunds:
    def test_moves_liquid_funds_into_bucket(self):
        portfolio = make_portfolio()

        allocate_funds(portfolio, "bonds", 200, mode=RECOMPUTE)

        assert portfolio.liquid_funds == Decimal("300")
        assert portfolio.allocation.bonds == Decimal("200")
        assert portfolio.total_value == Decimal("1500")
        assert portfolio.total_value == portfolio.components_total

    def test_increment_mode_adds_amount_to_total(self):
        portfolio = make_portfolio()

        allocate_funds(portfolio, "savings", "125.50", mode=INCREMENT)

        assert portfolio.allocation.savings == Decimal("125.50")
        assert portfolio.total_value == Decimal("1625.50")

    def test_camel_case_index_funds(self):
        portfolio = make_portfolio()

        allocate_funds(portfolio, "indexFunds", 500, mode=RECOMPUTE)

        assert portfolio.allocation.index_funds == Decimal("500")
        assert portfolio.liquid_funds == Decimal("0")

    def test_overdraw_fails_without_mutation(self):
        portfolio = make_portfolio()
        before = portfolio.model_dump()

        with pytest.raises(InsufficientFundsError):
            allocate_funds(portfolio, "bonds", 600)

        assert portfolio.model_dump() == before

    @pytest.mark.parametrize("amount", [0, -10])
    def test_amount_must_be_positive(self, amount):
        portfolio = make_portfolio()

        with pytest.raises(InsufficientFundsError):
            allocate_funds(portfolio, "bonds", amount)

    def test_unknown_asset_class(self):
        with pytest.raises(ValidationException):
            allocate_funds(make_portfolio(), "crypto", 10)

    def test_mode_defaults_to_settings(self, monkeypatch):
        monkeypatch.setenv("FLIT_TOTAL_VALUE_MODE", "increment")
        portfolio = make_portfolio(total_value=Decimal("0"))

        allocate_funds(portfolio, "bonds", 100)

        assert portfolio.total_value == Decimal("100")


class TestBuyStock:
    def test_new_holding(self):
        portfolio = make_portfolio()

        buy_stock(portfolio, make_stock("100"), 3, mode=RECOMPUTE)

        holding = portfolio.find_holding("AAPL")
        assert holding.shares == Decimal("3")
        assert holding.average_price == Decimal("100")
        assert holding.total_value == Decimal("300")
        assert holding.change_percent == 0.0
        assert portfolio.lesson_rewards == Decimal("700")
        assert portfolio.total_value == portfolio.components_total

    def test_weighted_average_cost(self):
        portfolio = make_portfolio()
        buy_stock(portfolio, make_stock("100"), 2)

        buy_stock(portfolio, make_stock("130"), 1)

        holding = portfolio.find_holding("AAPL")
        assert holding.shares == Decimal("3")
        assert holding.average_price == Decimal("110")
        assert holding.total_value == Decimal("390")
        assert holding.change_percent == pytest.approx(18.1818, rel=1e-4)

    def test_buying_twice_equals_buying_once(self):
        stock = make_stock("178.32")
        twice = make_portfolio()
        once = make_portfolio()

        buy_stock(twice, stock, 2)
        buy_stock(twice, stock, 2)
        buy_stock(once, stock, 4)

        a, b = twice.find_holding("AAPL"), once.find_holding("AAPL")
        assert (a.shares, a.average_price, a.total_value) == (b.shares, b.average_price, b.total_value)
        assert twice.lesson_rewards == once.lesson_rewards

    def test_zero_shares_keeps_average(self):
        portfolio = make_portfolio()
        buy_stock(portfolio, make_stock("100"), 2)

        with pytest.raises(ValidationException):
            buy_stock(portfolio, make_stock("150"), 0)

        assert portfolio.find_holding("AAPL").average_price == Decimal("100")

    def test_locked_stock_is_rejected(self):
        portfolio = make_portfolio()
        before = portfolio.model_dump()
        stock = make_stock("100", symbol="NVDA", required_lessons=["lesson_risk"])

        with pytest.raises(AssetLockedError):
            buy_stock(portfolio, stock, 1, completed_lessons=["lesson_basics"])

        assert portfolio.model_dump() == before
        buy_stock(portfolio, stock, 1, completed_lessons=["lesson_risk"])
        assert portfolio.find_holding("NVDA") is not None

    def test_cost_above_rewards_is_rejected(self):
        portfolio = make_portfolio(lesson_rewards=Decimal("100"))

        with pytest.raises(InsufficientFundsError) as exc_info:
            buy_stock(portfolio, make_stock("60"), 2)

        assert exc_info.value.details["balance"] == "lessonRewards"
        assert portfolio.holdings == []

    def test_total_matches_components_after_mixed_operations(self):
        portfolio = make_portfolio(total_value=Decimal("0"))

        allocate_funds(portfolio, "bonds", "120.25", mode=RECOMPUTE)
        buy_stock(portfolio, make_stock("33.33"), 3, mode=RECOMPUTE)
        allocate_funds(portfolio, "savings", 80, mode=RECOMPUTE)

        assert portfolio.total_value == portfolio.components_total
        assert portfolio.total_value == Decimal("1500")
