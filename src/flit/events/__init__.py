"""Event channel for league and draft updates."""

from .event_bus import EventBus, get_event_bus, set_event_bus
from .events import (
    CompetitionStartedEvent,
    DomainEvent,
    DraftCompletedEvent,
    DraftPickMadeEvent,
    DraftStartedEvent,
    DraftStateChangedEvent,
    LeagueCreatedEvent,
    MemberJoinedEvent,
    MemberLeftEvent,
    TradeProposedEvent,
    TradeResolvedEvent,
    WaiverClaimsProcessedEvent,
)

__all__ = [
    # Events
    "DomainEvent",
    "LeagueCreatedEvent",
    "MemberJoinedEvent",
    "MemberLeftEvent",
    "CompetitionStartedEvent",
    "DraftStartedEvent",
    "DraftPickMadeEvent",
    "DraftStateChangedEvent",
    "DraftCompletedEvent",
    "TradeProposedEvent",
    "TradeResolvedEvent",
    "WaiverClaimsProcessedEvent",
    # Event Bus
    "EventBus",
    "get_event_bus",
    "set_event_bus",
]
