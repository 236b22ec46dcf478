"""Per-domain fantasy services delegating to the REST backend."""

from .draft_service import DraftService
from .league_service import LeagueService
from .market_service import MarketService
from .matchup_service import MatchupService
from .portfolio_service import PortfolioService
from .trade_service import TradeService
from .waiver_service import WaiverService

__all__ = [
    "DraftService",
    "LeagueService",
    "MarketService",
    "MatchupService",
    "PortfolioService",
    "TradeService",
    "WaiverService",
]
