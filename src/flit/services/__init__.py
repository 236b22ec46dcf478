"""Service layer for backend access."""

from .api_client import ApiClient, handle_api_error
from .fantasy import (
    DraftService,
    LeagueService,
    MarketService,
    MatchupService,
    PortfolioService,
    TradeService,
    WaiverService,
)

__all__ = [
    "ApiClient",
    "handle_api_error",
    "DraftService",
    "LeagueService",
    "MarketService",
    "MatchupService",
    "PortfolioService",
    "TradeService",
    "WaiverService",
]
