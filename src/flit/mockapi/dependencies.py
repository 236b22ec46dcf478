"""FastAPI dependencies resolving the app's store, event bus and managers."""

from fastapi import Depends, Request

from ..events import EventBus
from ..fantasy import (
    DraftScheduler,
    FantasyStore,
    LeagueManager,
    MatchupBoard,
    TradeDesk,
    WaiverWire,
)


def get_store(request: Request) -> FantasyStore:
    return request.app.state.store


def get_event_bus(request: Request) -> EventBus:
    return request.app.state.event_bus


def get_league_manager(store: FantasyStore = Depends(get_store)) -> LeagueManager:
    return LeagueManager(store)


def get_draft_scheduler(store: FantasyStore = Depends(get_store)) -> DraftScheduler:
    return DraftScheduler(store)


def get_matchup_board(store: FantasyStore = Depends(get_store)) -> MatchupBoard:
    return MatchupBoard(store)


def get_trade_desk(store: FantasyStore = Depends(get_store)) -> TradeDesk:
    return TradeDesk(store)


def get_waiver_wire(store: FantasyStore = Depends(get_store)) -> WaiverWire:
    return WaiverWire(store)
