"""Fantasy portfolio and lineup endpoints."""

from fastapi import APIRouter, Depends, Response

from ...fantasy import FantasyStore, Portfolio, update_lineup
from ..dependencies import get_store
from ..models import LineupRequest

league_router = APIRouter()
router = APIRouter()


@league_router.get(
    "/{league_id}/portfolio/{user_id}", response_model=Portfolio, summary="Get Portfolio"
)
async def get_portfolio(
    league_id: str, user_id: str, store: FantasyStore = Depends(get_store)
):
    store.get_league(league_id)
    return store.get_league_portfolio(league_id, user_id)


@router.put("/{portfolio_id}/lineup", status_code=204, summary="Update Lineup")
async def put_lineup(
    portfolio_id: str, body: LineupRequest, store: FantasyStore = Depends(get_store)
):
    portfolio = store.get_portfolio(portfolio_id)
    league = store.get_league(portfolio.league_id)
    update_lineup(portfolio, body.active_slot_ids, body.bench_slot_ids, league.settings)
    return Response(status_code=204)
