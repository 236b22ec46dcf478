"""Draft room endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ...events import DraftCompletedEvent, DraftPickMadeEvent, DraftStartedEvent, EventBus
from ...fantasy import Asset, DraftPick, DraftScheduler, DraftState, DraftStatus
from ..dependencies import get_draft_scheduler, get_event_bus
from ..models import MakePickRequest

router = APIRouter()


@router.get("", response_model=DraftState, summary="Get Draft State")
async def get_draft_state(
    league_id: str, scheduler: DraftScheduler = Depends(get_draft_scheduler)
):
    return scheduler.get_draft_state(league_id)


@router.post("/start", response_model=DraftState, summary="Start Draft")
async def start_draft(
    league_id: str,
    scheduler: DraftScheduler = Depends(get_draft_scheduler),
    bus: EventBus = Depends(get_event_bus),
):
    state = scheduler.start_draft(league_id)
    await bus.publish(
        DraftStartedEvent(league_id=league_id, first_user_id=state.current_user_id)
    )
    return state


@router.post("/pause", response_model=DraftState, summary="Pause Draft")
async def pause_draft(
    league_id: str, scheduler: DraftScheduler = Depends(get_draft_scheduler)
):
    return scheduler.pause_draft(league_id)


@router.post("/resume", response_model=DraftState, summary="Resume Draft")
async def resume_draft(
    league_id: str, scheduler: DraftScheduler = Depends(get_draft_scheduler)
):
    return scheduler.resume_draft(league_id)


@router.post("/pick", response_model=DraftPick, summary="Make Pick")
async def make_pick(
    league_id: str,
    body: MakePickRequest,
    scheduler: DraftScheduler = Depends(get_draft_scheduler),
    bus: EventBus = Depends(get_event_bus),
):
    pick = scheduler.make_pick(league_id, body.user_id, body.asset_id)
    state = scheduler.get_draft_state(league_id)

    await bus.publish(
        DraftPickMadeEvent(
            league_id=league_id,
            user_id=pick.user_id,
            asset_id=pick.asset_id,
            round=pick.round,
            pick_number=pick.pick_number,
            next_user_id=(
                None if state.status == DraftStatus.COMPLETED else state.current_user_id
            ),
        )
    )
    if state.status == DraftStatus.COMPLETED:
        await bus.publish(DraftCompletedEvent(league_id=league_id, total_picks=len(state.picks)))
    return pick


@router.get("/assets", response_model=List[Asset], summary="Draftable Assets")
async def get_draftable_assets(
    league_id: str,
    search: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
    scheduler: DraftScheduler = Depends(get_draft_scheduler),
):
    return scheduler.get_draftable_assets(league_id, search, user_id)
