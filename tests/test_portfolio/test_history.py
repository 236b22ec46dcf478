"""Tests for synthetic performance history."""

import random
import sys
from datetime import datetime, timedelta, timezone

import pytest

sys.path.append("src")

from flit.portfolio import (
    calculate_volatility_factor,
    generate_intraday_data,
    generate_portfolio_history,
)
from flit.portfolio.history import LOOKBACK_DAYS

NOW = datetime(2025, 11, 10, 12, 0)
START = NOW - timedelta(days=40)


class TestPortfolioHistory:
    @pytest.mark.parametrize("seed", [1, 7, 42, 1234])
    def test_anchor_and_floors(self, seed):
        series = generate_portfolio_history(
            11000, 10000, START, volatility_factor=1.4, rng=random.Random(seed), now=NOW
        )

        assert series[-1].value == 11000
        pre_start, post_start = series[:LOOKBACK_DAYS], series[LOOKBACK_DAYS:]
        assert min(p.value for p in pre_start) >= 7000
        assert min(p.value for p in post_start) >= 8000

    def test_anchor_for_losing_portfolio(self):
        series = generate_portfolio_history(8200, 10000, START, rng=random.Random(3), now=NOW)

        assert series[-1].value == 8200

    def test_timestamps_ascend(self):
        series = generate_portfolio_history(11000, 10000, START, rng=random.Random(5), now=NOW)

        timestamps = [p.timestamp for p in series]
        assert timestamps == sorted(timestamps)
        assert timestamps[0] == NOW - timedelta(days=LOOKBACK_DAYS + 40)

    def test_intraday_points_replace_daily_anchor(self):
        series = generate_portfolio_history(11000, 10000, START, rng=random.Random(5), now=NOW)

        # 41 post-start days minus today's anchor, plus 09:30..12:00 every 30 minutes
        assert len(series) == LOOKBACK_DAYS + 40 + 6
        assert series[-1].timestamp == NOW

    def test_before_market_open_keeps_daily_anchor(self):
        early = NOW.replace(hour=8)
        series = generate_portfolio_history(
            11000, 10000, early - timedelta(days=40), rng=random.Random(5), now=early
        )

        assert len(series) == LOOKBACK_DAYS + 41
        assert series[-1].timestamp == early
        assert series[-1].value == 11000

    def test_same_seed_same_series(self):
        a = generate_portfolio_history(11000, 10000, START, rng=random.Random("league_1"), now=NOW)
        b = generate_portfolio_history(11000, 10000, START, rng=random.Random("league_1"), now=NOW)

        assert [p.value for p in a] == [p.value for p in b]

    def test_aware_start_date(self):
        start = datetime(2025, 10, 1, tzinfo=timezone.utc)

        series = generate_portfolio_history(10500, 10000, start, rng=random.Random(9), now=NOW)

        assert series[-1].value == 10500
        assert series[0].timestamp.tzinfo is None

    def test_future_start_has_no_post_start_days(self):
        series = generate_portfolio_history(
            10000, 10000, NOW + timedelta(days=5), rng=random.Random(2), now=NOW.replace(hour=8)
        )

        assert len(series) == LOOKBACK_DAYS + 1
        assert series[-1].value == 10000


class TestIntraday:
    def test_points_until_now(self):
        now = NOW.replace(hour=11)

        points = generate_intraday_data(5000, rng=random.Random(1), now=now)

        assert [p.timestamp.strftime("%H:%M") for p in points] == ["09:30", "10:00", "10:30", "11:00"]
        assert points[-1].value == 5000
        assert all(p.value >= 5000 * 0.95 for p in points)

    def test_full_session_after_close(self):
        points = generate_intraday_data(5000, rng=random.Random(1), now=NOW.replace(hour=18))

        assert len(points) == 14
        assert points[-1].timestamp.strftime("%H:%M") == "16:00"

    def test_empty_before_open(self):
        assert generate_intraday_data(5000, now=NOW.replace(hour=9, minute=0)) == []


class TestVolatilityFactor:
    @pytest.mark.parametrize("league_id", ["league_1", "league-2", "a", "zzzzzzzzzzzzzzzz"])
    @pytest.mark.parametrize("balance", [1000, 10000, 100000])
    def test_factor_range(self, league_id, balance):
        factor = calculate_volatility_factor(league_id, balance)

        assert 0.7 <= factor <= 1.4

    def test_factor_is_stable(self):
        assert calculate_volatility_factor("league_1", 10000) == calculate_volatility_factor(
            "league_1", 10000
        )
