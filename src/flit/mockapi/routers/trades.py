"""Trade endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ...events import EventBus, TradeProposedEvent, TradeResolvedEvent
from ...fantasy import Trade, TradeDesk
from ..dependencies import get_event_bus, get_trade_desk
from ..models import ProposeTradeRequest, UserActionRequest

router = APIRouter()


@router.get("", response_model=List[Trade], summary="List Trades")
async def list_trades(
    league_id: str,
    user_id: Optional[str] = Query(None, alias="userId"),
    desk: TradeDesk = Depends(get_trade_desk),
):
    return desk.list_trades(league_id, user_id)


@router.post("", response_model=Trade, status_code=201, summary="Propose Trade")
async def propose_trade(
    league_id: str,
    body: ProposeTradeRequest,
    desk: TradeDesk = Depends(get_trade_desk),
    bus: EventBus = Depends(get_event_bus),
):
    trade = desk.propose(
        league_id,
        body.proposer_id,
        body.recipient_id,
        body.offered_assets,
        body.requested_assets,
    )
    await bus.publish(
        TradeProposedEvent(
            league_id=league_id,
            trade_id=trade.id,
            proposer_id=trade.proposer_id,
            recipient_id=trade.recipient_id,
        )
    )
    return trade


async def _resolved(bus: EventBus, trade: Trade, user_id: str) -> Trade:
    await bus.publish(
        TradeResolvedEvent(
            league_id=trade.league_id,
            trade_id=trade.id,
            status=trade.status.value,
            resolved_by=user_id,
        )
    )
    return trade


@router.post("/{trade_id}/accept", response_model=Trade, summary="Accept Trade")
async def accept_trade(
    league_id: str,
    trade_id: str,
    body: UserActionRequest,
    desk: TradeDesk = Depends(get_trade_desk),
    bus: EventBus = Depends(get_event_bus),
):
    return await _resolved(bus, desk.accept(league_id, trade_id, body.user_id), body.user_id)


@router.post("/{trade_id}/reject", response_model=Trade, summary="Reject Trade")
async def reject_trade(
    league_id: str,
    trade_id: str,
    body: UserActionRequest,
    desk: TradeDesk = Depends(get_trade_desk),
    bus: EventBus = Depends(get_event_bus),
):
    return await _resolved(bus, desk.reject(league_id, trade_id, body.user_id), body.user_id)


@router.post("/{trade_id}/cancel", response_model=Trade, summary="Cancel Trade")
async def cancel_trade(
    league_id: str,
    trade_id: str,
    body: UserActionRequest,
    desk: TradeDesk = Depends(get_trade_desk),
    bus: EventBus = Depends(get_event_bus),
):
    return await _resolved(bus, desk.cancel(league_id, trade_id, body.user_id), body.user_id)
