"""Fantasy portfolio service."""

from typing import Optional, Sequence

from ...fantasy.models import Portfolio
from .base import FantasyService


class PortfolioService(FantasyService):
    name = "portfolio_service"

    async def get_portfolio(self, league_id: str, user_id: str) -> Optional[Portfolio]:
        data = await self.client.get_or_none(
            f"/fantasy-leagues/{league_id}/portfolio/{user_id}"
        )
        return self.parse(Portfolio, data)

    async def update_lineup(
        self,
        portfolio_id: str,
        active_slot_ids: Sequence[str],
        bench_slot_ids: Sequence[str],
    ) -> None:
        await self.client.put(
            f"/fantasy-portfolios/{portfolio_id}/lineup",
            json={
                "activeSlotIds": list(active_slot_ids),
                "benchSlotIds": list(bench_slot_ids),
            },
        )
        self.logger.info(
            "Lineup saved",
            portfolio_id=portfolio_id,
            active=len(active_slot_ids),
            bench=len(bench_slot_ids),
        )
