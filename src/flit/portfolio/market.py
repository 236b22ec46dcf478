"""Market index baseline used to compare portfolio performance."""

import random
from datetime import datetime, timedelta
from typing import List, Optional

from .models import PortfolioSnapshot


def generate_market_baseline(
    days: int = 30,
    start_value: float = 10000.0,
    volatility: float = 0.015,
    trend: float = 0.0003,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[PortfolioSnapshot]:
    """Daily random walk with a slight upward trend, floored at 80% of the start."""
    rng = rng or random.Random()
    now = now or datetime.now()
    floor = start_value * 0.8

    value = start_value
    data = []
    for days_ago in range(days, -1, -1):
        change = (rng.random() - 0.5) * volatility * value + trend * value
        value = max(value + change, floor)
        data.append(
            PortfolioSnapshot(timestamp=now - timedelta(days=days_ago), value=round(value, 2))
        )
    return data
