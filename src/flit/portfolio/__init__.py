"""Learning portfolio: allocation, purchases and chart history."""

from .book import PortfolioBook
from .history import (
    calculate_volatility_factor,
    generate_intraday_data,
    generate_portfolio_history,
)
from .market import generate_market_baseline
from .models import (
    AssetAllocation,
    Portfolio,
    PortfolioSnapshot,
    Stock,
    StockHolding,
    TimeFrame,
)
from .timeframes import filter_data_by_time_frame, normalize_data, sample_data
from .valuation import allocate_funds, buy_stock, recompute_total_value

__all__ = [
    "AssetAllocation",
    "Portfolio",
    "PortfolioBook",
    "PortfolioSnapshot",
    "Stock",
    "StockHolding",
    "TimeFrame",
    "allocate_funds",
    "buy_stock",
    "calculate_volatility_factor",
    "filter_data_by_time_frame",
    "generate_intraday_data",
    "generate_market_baseline",
    "generate_portfolio_history",
    "normalize_data",
    "recompute_total_value",
    "sample_data",
]
