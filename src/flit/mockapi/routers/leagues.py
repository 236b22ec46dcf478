"""League lifecycle endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from ...config.logging import get_logger
from ...events import (
    CompetitionStartedEvent,
    EventBus,
    LeagueCreatedEvent,
    MemberJoinedEvent,
    MemberLeftEvent,
)
from ...fantasy import JoinLeagueResult, League, LeagueManager, LeaveLeagueResult, User
from ..dependencies import get_event_bus, get_league_manager
from ..models import (
    CreateLeagueRequest,
    JoinByCodeRequest,
    UpdateSettingsRequest,
    UserActionRequest,
)

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=List[League], summary="List Leagues")
async def list_leagues(
    user_id: Optional[str] = Query(None, alias="userId"),
    manager: LeagueManager = Depends(get_league_manager),
):
    """All leagues, or only those ``userId`` belongs to."""
    return manager.list_leagues(user_id)


@router.post("", response_model=League, status_code=201, summary="Create League")
async def create_league(
    body: CreateLeagueRequest,
    manager: LeagueManager = Depends(get_league_manager),
    bus: EventBus = Depends(get_event_bus),
):
    league = manager.create_league(body.name, body.admin_user_id, body.settings)
    await bus.publish(
        LeagueCreatedEvent(
            league_id=league.id,
            admin_user_id=league.admin_user_id,
            join_code=league.join_code,
        )
    )
    return league


@router.post("/join-by-code", response_model=JoinLeagueResult, summary="Join League")
async def join_by_code(
    body: JoinByCodeRequest,
    request: Request,
    manager: LeagueManager = Depends(get_league_manager),
    bus: EventBus = Depends(get_event_bus),
):
    result = manager.join_by_code(body.join_code, body.user_id)
    league = result.league

    logger.info(
        "Member joined league",
        league_id=league.id,
        user_id=body.user_id,
        request_id=getattr(request.state, "request_id", None),
    )
    await bus.publish(MemberJoinedEvent(league_id=league.id, user_id=body.user_id))
    return result


@router.get("/{league_id}", response_model=League, summary="Get League")
async def get_league(
    league_id: str, manager: LeagueManager = Depends(get_league_manager)
):
    return manager.get_league(league_id)


@router.post("/{league_id}/start", status_code=204, summary="Start Competition")
async def start_competition(
    league_id: str,
    body: UserActionRequest,
    manager: LeagueManager = Depends(get_league_manager),
    bus: EventBus = Depends(get_event_bus),
):
    manager.start_competition(league_id, body.user_id)
    await bus.publish(CompetitionStartedEvent(league_id=league_id, started_by=body.user_id))
    return Response(status_code=204)


@router.delete("/{league_id}/leave", response_model=LeaveLeagueResult, summary="Leave League")
async def leave_league(
    league_id: str,
    body: UserActionRequest,
    manager: LeagueManager = Depends(get_league_manager),
    bus: EventBus = Depends(get_event_bus),
):
    result = manager.leave_league(league_id, body.user_id)
    await bus.publish(
        MemberLeftEvent(
            league_id=league_id,
            user_id=body.user_id,
            league_deleted=result.league_deleted,
        )
    )
    return result


@router.put("/{league_id}/settings", response_model=League, summary="Update League Settings")
async def update_settings(
    league_id: str,
    body: UpdateSettingsRequest,
    manager: LeagueManager = Depends(get_league_manager),
):
    return manager.update_settings(league_id, body.user_id, body.settings)


users_router = APIRouter()


@users_router.post(
    "/{user_id}/lessons/{lesson_id}", response_model=User, summary="Complete Lesson"
)
async def complete_lesson(
    user_id: str,
    lesson_id: str,
    manager: LeagueManager = Depends(get_league_manager),
):
    return manager.complete_lesson(user_id, lesson_id)
