"""Waiver wire endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ...events import EventBus, WaiverClaimsProcessedEvent
from ...fantasy import Asset, WaiverClaim, WaiverStatus, WaiverWire
from ..dependencies import get_event_bus, get_waiver_wire
from ..models import WaiverClaimRequest

router = APIRouter()


@router.get("/assets", response_model=List[Asset], summary="Available Assets")
async def available_assets(
    league_id: str,
    search: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
    wire: WaiverWire = Depends(get_waiver_wire),
):
    return wire.available_assets(league_id, search, user_id)


@router.get("", response_model=List[WaiverClaim], summary="List Waiver Claims")
async def list_claims(
    league_id: str,
    user_id: Optional[str] = Query(None, alias="userId"),
    wire: WaiverWire = Depends(get_waiver_wire),
):
    return wire.list_claims(league_id, user_id)


@router.post("", response_model=WaiverClaim, status_code=201, summary="Submit Waiver Claim")
async def submit_claim(
    league_id: str,
    body: WaiverClaimRequest,
    wire: WaiverWire = Depends(get_waiver_wire),
):
    return wire.submit_claim(league_id, body.user_id, body.asset_id, body.drop_asset_id)


@router.post("/process", response_model=List[WaiverClaim], summary="Process Waiver Claims")
async def process_claims(
    league_id: str,
    wire: WaiverWire = Depends(get_waiver_wire),
    bus: EventBus = Depends(get_event_bus),
):
    claims = wire.process_claims(league_id)
    await bus.publish(
        WaiverClaimsProcessedEvent(
            league_id=league_id,
            processed_claim_ids=[c.id for c in claims if c.status == WaiverStatus.PROCESSED],
            failed_claim_ids=[c.id for c in claims if c.status == WaiverStatus.FAILED],
        )
    )
    return claims
