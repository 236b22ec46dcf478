"""Asset catalogue endpoints scoped to a league."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ...exceptions import NotFoundError
from ...fantasy import Asset, FantasyStore, eligible_for_league
from ..dependencies import get_store

router = APIRouter()


@router.get("/assets", response_model=List[Asset], summary="Search Market Assets")
async def search_assets(
    league_id: str,
    search: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None, alias="userId"),
    store: FantasyStore = Depends(get_store),
):
    """League-eligible assets matching ``search``, locked per ``userId``."""
    league = store.get_league(league_id)
    user = store.find_user(user_id) if user_id else None
    return [
        asset.view_for(user)
        for asset in store.list_assets()
        if eligible_for_league(asset, league) and asset.matches(search)
    ]


@router.get("/assets/{ticker}", response_model=Asset, summary="Get Asset By Ticker")
async def get_asset(
    league_id: str,
    ticker: str,
    user_id: Optional[str] = Query(None, alias="userId"),
    store: FantasyStore = Depends(get_store),
):
    store.get_league(league_id)
    asset = store.find_asset_by_ticker(ticker)
    if asset is None:
        raise NotFoundError("Asset", ticker)
    user = store.find_user(user_id) if user_id else None
    return asset.view_for(user)
