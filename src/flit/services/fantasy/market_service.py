"""Market service."""

from typing import List, Optional

from ...fantasy.models import Asset
from .base import FantasyService


class MarketService(FantasyService):
    name = "market_service"

    async def search_assets(
        self,
        league_id: str,
        query: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> List[Asset]:
        data = await self.client.get(
            f"/fantasy-leagues/{league_id}/market/assets",
            params={"search": query or None, "userId": user_id},
        )
        return self.parse_list(Asset, data)

    async def get_asset_by_ticker(
        self, league_id: str, ticker: str, user_id: Optional[str] = None
    ) -> Optional[Asset]:
        data = await self.client.get_or_none(
            f"/fantasy-leagues/{league_id}/market/assets/{ticker}",
            params={"userId": user_id},
        )
        return self.parse(Asset, data)
