"""
Mock backend routers.

- leagues: league lifecycle under /fantasy-leagues
- draft: /fantasy-leagues/{league_id}/draft
- portfolios: league portfolios and /fantasy-portfolios lineups
- market: /fantasy-leagues/{league_id}/market
- matchups: /fantasy-leagues/{league_id}/matchup(s)
- trades: /fantasy-leagues/{league_id}/trades
- waivers: /fantasy-leagues/{league_id}/waivers
"""

from fastapi import APIRouter

from . import draft, leagues, market, matchups, portfolios, trades, waivers

router = APIRouter()

router.include_router(
    draft.router, prefix="/fantasy-leagues/{league_id}/draft", tags=["Draft"]
)
router.include_router(
    market.router, prefix="/fantasy-leagues/{league_id}/market", tags=["Market"]
)
router.include_router(
    matchups.router, prefix="/fantasy-leagues/{league_id}", tags=["Matchups"]
)
router.include_router(
    trades.router, prefix="/fantasy-leagues/{league_id}/trades", tags=["Trades"]
)
router.include_router(
    waivers.router, prefix="/fantasy-leagues/{league_id}/waivers", tags=["Waivers"]
)
router.include_router(
    portfolios.league_router, prefix="/fantasy-leagues", tags=["Portfolios"]
)
router.include_router(leagues.router, prefix="/fantasy-leagues", tags=["Leagues"])
router.include_router(
    portfolios.router, prefix="/fantasy-portfolios", tags=["Portfolios"]
)
router.include_router(leagues.users_router, prefix="/users", tags=["Users"])

__all__ = ["router"]
