"""Request and response bodies for the mock fantasy backend."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from ..fantasy.models import FantasyModel, LeagueSettings, utcnow


class CreateLeagueRequest(FantasyModel):
    name: str
    admin_user_id: str
    settings: Optional[LeagueSettings] = None


class UserActionRequest(FantasyModel):
    """Body carrying only the acting user."""

    user_id: str


class UpdateSettingsRequest(FantasyModel):
    user_id: str
    settings: LeagueSettings


class JoinByCodeRequest(FantasyModel):
    join_code: str
    user_id: str


class MakePickRequest(FantasyModel):
    user_id: str
    asset_id: str


class LineupRequest(FantasyModel):
    active_slot_ids: List[str] = Field(default_factory=list)
    bench_slot_ids: List[str] = Field(default_factory=list)


class ProposeTradeRequest(FantasyModel):
    proposer_id: str
    recipient_id: str
    offered_assets: List[str] = Field(default_factory=list)
    requested_assets: List[str] = Field(default_factory=list)


class WaiverClaimRequest(FantasyModel):
    user_id: str
    asset_id: str
    drop_asset_id: Optional[str] = None


class ErrorResponse(FantasyModel):
    """Error body; ``message`` is read by the API client."""

    success: bool = False
    message: str
    error: Dict[str, Any]
    request_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=utcnow)
