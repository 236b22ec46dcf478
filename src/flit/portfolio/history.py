"""Synthetic performance history for portfolio charts.

The series is a presentation device, not a market model. Its contracts are
the two floor clamps and that the final point always equals the portfolio's
current value.
"""

import math
import random
from datetime import datetime, timedelta
from typing import List, Optional

from .models import PortfolioSnapshot

LOOKBACK_DAYS = 1825
BASE_VOLATILITY = 0.02
PRE_START_FLOOR = 0.7
POST_START_FLOOR = 0.8
INTRADAY_FLOOR = 0.95
INITIAL_VALUE_RATIO = 0.85
MARKET_OPEN = (9, 30)
MARKET_CLOSE = (16, 0)
INTRADAY_STEP = timedelta(minutes=30)

MIN_VOLATILITY_FACTOR = 0.7
MAX_VOLATILITY_FACTOR = 1.4


def _local_naive(moment: datetime) -> datetime:
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment


def calculate_volatility_factor(league_id: str, starting_balance: float) -> float:
    """
    Stable per-league volatility multiplier in ``[0.7, 1.4]``.

    Derived from the sum of the league id's character codes, scaled down for
    larger starting balances.
    """
    code_sum = sum(ord(char) for char in league_id)
    normalized = (code_sum % 100) / 100
    balance_factor = max(0.7, 1.2 - starting_balance / 50000)
    factor = MIN_VOLATILITY_FACTOR + normalized * 0.7 * balance_factor
    return min(factor, MAX_VOLATILITY_FACTOR)


def generate_intraday_data(
    current_value: float,
    volatility: float = 0.01,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[PortfolioSnapshot]:
    """30-minute points from market open until ``now`` (or close) today."""
    rng = rng or random.Random()
    now = _local_naive(now or datetime.now())

    current = now.replace(hour=MARKET_OPEN[0], minute=MARKET_OPEN[1], second=0, microsecond=0)
    close = now.replace(hour=MARKET_CLOSE[0], minute=MARKET_CLOSE[1], second=0, microsecond=0)
    floor = current_value * INTRADAY_FLOOR

    value = current_value * 0.998
    data = []
    while current <= close and current <= now:
        change = (rng.random() - 0.5) * volatility * value
        value = max(value + change, floor)
        data.append(PortfolioSnapshot(timestamp=current, value=round(value, 2)))
        current += INTRADAY_STEP

    if data:
        data[-1] = PortfolioSnapshot(timestamp=data[-1].timestamp, value=current_value)
    return data


def generate_portfolio_history(
    current_value: float,
    starting_balance: float,
    league_start_date: datetime,
    volatility_factor: float = 1.0,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[PortfolioSnapshot]:
    """
    Daily history bridging a 5-year lookback to ``current_value``, plus today's
    intraday points.

    Args:
        current_value: Portfolio value the series must end on
        starting_balance: League starting balance
        league_start_date: When the league started
        volatility_factor: Multiplier on the base daily volatility
        rng: Random source; seed it for stable output
        now: Reference time, defaults to the local wall clock

    Returns:
        Snapshots in ascending timestamp order whose last value equals
        ``current_value``
    """
    rng = rng or random.Random()
    now = _local_naive(now or datetime.now())
    start = _local_naive(league_start_date)

    days_since_start = max(math.floor((now - start).total_seconds() / 86400), 0)
    total_days = LOOKBACK_DAYS + days_since_start

    total_return = (current_value - starting_balance) / starting_balance
    daily_trend = total_return / max(days_since_start, 1)
    base_volatility = BASE_VOLATILITY * volatility_factor

    pre_floor = starting_balance * PRE_START_FLOOR
    post_floor = starting_balance * POST_START_FLOOR

    value = starting_balance * INITIAL_VALUE_RATIO
    data = []
    for days_ago in range(total_days, -1, -1):
        if days_ago > days_since_start:
            days_before_start = days_ago - days_since_start
            trend = (starting_balance - value) / max(days_before_start, 1) * 0.3
            change = (rng.random() - 0.5) * base_volatility * value + trend
            value = max(value + change, pre_floor)
        else:
            volatility = base_volatility * (1 + rng.random() * 0.5)
            change = (rng.random() - 0.5) * volatility * value + daily_trend * value
            value = max(value + change, post_floor)

        data.append(
            PortfolioSnapshot(timestamp=now - timedelta(days=days_ago), value=round(value, 2))
        )

    data[-1] = PortfolioSnapshot(timestamp=data[-1].timestamp, value=current_value)

    intraday = generate_intraday_data(current_value, base_volatility * 0.5, rng=rng, now=now)
    if not intraday:
        # Before market open the daily anchor stays the final point
        return data
    return data[:-1] + intraday
