"""Weekly matchup endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Query

from ...exceptions import NotFoundError
from ...fantasy import Matchup, MatchupBoard
from ..dependencies import get_matchup_board

router = APIRouter()


@router.get("/matchup/current", response_model=Matchup, summary="Current Matchup")
async def current_matchup(
    league_id: str,
    user_id: str = Query(..., alias="userId"),
    board: MatchupBoard = Depends(get_matchup_board),
):
    matchup = board.current_matchup(league_id, user_id)
    if matchup is None:
        raise NotFoundError("Matchup", f"{league_id}/current/{user_id}")
    return matchup


@router.get("/matchup/week/{week}", response_model=Matchup, summary="Matchup For Week")
async def matchup_for_week(
    league_id: str,
    week: int,
    user_id: str = Query(..., alias="userId"),
    board: MatchupBoard = Depends(get_matchup_board),
):
    matchup = board.matchup_for_week(league_id, week, user_id)
    if matchup is None:
        raise NotFoundError("Matchup", f"{league_id}/week/{week}/{user_id}")
    return matchup


@router.get("/matchups/week/{week}", response_model=List[Matchup], summary="Week Matchups")
async def week_matchups(
    league_id: str, week: int, board: MatchupBoard = Depends(get_matchup_board)
):
    return board.week_matchups(league_id, week)
