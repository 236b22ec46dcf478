"""Fantasy league domain: leagues, drafts, lineups, matchups, trades and waivers."""

from .draft import DraftScheduler, eligible_for_league
from .leagues import LeagueManager
from .lineup import portfolio_total_value, update_lineup, weekly_return
from .matchups import MatchupBoard, build_matchups, schedule_week, score_portfolio
from .models import (
    Asset,
    AssetTier,
    AssetType,
    DraftPick,
    DraftState,
    DraftStatus,
    DraftType,
    JoinLeagueResult,
    League,
    LeagueSettings,
    LeagueStatus,
    LeaveLeagueResult,
    Matchup,
    Membership,
    Portfolio,
    PortfolioSlot,
    ScoringMethod,
    SlotStatus,
    Trade,
    TradeStatus,
    User,
    WaiverClaim,
    WaiverPriority,
    WaiverStatus,
)
from .store import FantasyStore
from .trades import TradeDesk
from .waivers import WaiverWire

__all__ = [
    "Asset",
    "AssetTier",
    "AssetType",
    "DraftPick",
    "DraftScheduler",
    "DraftState",
    "DraftStatus",
    "DraftType",
    "FantasyStore",
    "JoinLeagueResult",
    "League",
    "LeagueManager",
    "LeagueSettings",
    "LeagueStatus",
    "LeaveLeagueResult",
    "Matchup",
    "MatchupBoard",
    "Membership",
    "Portfolio",
    "PortfolioSlot",
    "ScoringMethod",
    "SlotStatus",
    "Trade",
    "TradeDesk",
    "TradeStatus",
    "User",
    "WaiverClaim",
    "WaiverPriority",
    "WaiverStatus",
    "WaiverWire",
    "build_matchups",
    "eligible_for_league",
    "portfolio_total_value",
    "schedule_week",
    "score_portfolio",
    "update_lineup",
    "weekly_return",
]
