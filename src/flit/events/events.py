"""Domain events for fantasy leagues."""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..fantasy.models import utcnow


@dataclass
class DomainEvent(ABC):
    """Base class for all domain events."""

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=utcnow)
    event_version: str = "1.0"
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        result = {
            "event_type": self.__class__.__name__,
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "event_version": self.event_version,
            "metadata": self.metadata,
        }

        for field_name, field_value in self.__dict__.items():
            if field_name in result:
                continue
            if isinstance(field_value, datetime):
                result[field_name] = field_value.isoformat()
            else:
                result[field_name] = field_value

        return result


@dataclass
class LeagueCreatedEvent(DomainEvent):
    """A league was created."""

    league_id: str = ""
    admin_user_id: str = ""
    join_code: Optional[str] = None


@dataclass
class MemberJoinedEvent(DomainEvent):
    league_id: str = ""
    user_id: str = ""


@dataclass
class MemberLeftEvent(DomainEvent):
    league_id: str = ""
    user_id: str = ""
    league_deleted: bool = False


@dataclass
class CompetitionStartedEvent(DomainEvent):
    league_id: str = ""
    started_by: str = ""


@dataclass
class DraftStartedEvent(DomainEvent):
    league_id: str = ""
    first_user_id: Optional[str] = None


@dataclass
class DraftPickMadeEvent(DomainEvent):
    """A member made a draft pick."""

    league_id: str = ""
    user_id: str = ""
    asset_id: str = ""
    round: int = 0
    pick_number: int = 0
    next_user_id: Optional[str] = None


@dataclass
class DraftStateChangedEvent(DomainEvent):
    """A draft watcher observed a new draft state."""

    league_id: str = ""
    status: str = ""
    current_round: int = 0
    current_pick_number: int = 0
    current_user_id: Optional[str] = None
    pick_count: int = 0


@dataclass
class DraftCompletedEvent(DomainEvent):
    league_id: str = ""
    total_picks: int = 0


@dataclass
class TradeProposedEvent(DomainEvent):
    league_id: str = ""
    trade_id: str = ""
    proposer_id: str = ""
    recipient_id: str = ""


@dataclass
class TradeResolvedEvent(DomainEvent):
    league_id: str = ""
    trade_id: str = ""
    status: str = ""
    resolved_by: str = ""


@dataclass
class WaiverClaimsProcessedEvent(DomainEvent):
    """A waiver run finished."""

    league_id: str = ""
    processed_claim_ids: List[str] = field(default_factory=list)
    failed_claim_ids: List[str] = field(default_factory=list)
