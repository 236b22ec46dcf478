"""Waiver service."""

from typing import List, Optional

from ...fantasy.models import Asset, WaiverClaim
from .base import FantasyService


class WaiverService(FantasyService):
    name = "waiver_service"

    async def get_available_assets(
        self,
        league_id: str,
        query: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> List[Asset]:
        data = await self.client.get(
            f"/fantasy-leagues/{league_id}/waivers/assets",
            params={"search": query or None, "userId": user_id},
        )
        return self.parse_list(Asset, data)

    async def get_claims(
        self, league_id: str, user_id: Optional[str] = None
    ) -> List[WaiverClaim]:
        data = await self.client.get(
            f"/fantasy-leagues/{league_id}/waivers", params={"userId": user_id}
        )
        return self.parse_list(WaiverClaim, data)

    async def submit_claim(
        self,
        league_id: str,
        user_id: str,
        asset_id: str,
        drop_asset_id: Optional[str] = None,
    ) -> WaiverClaim:
        data = await self.client.post(
            f"/fantasy-leagues/{league_id}/waivers",
            json={"userId": user_id, "assetId": asset_id, "dropAssetId": drop_asset_id},
        )
        return self.parse(WaiverClaim, data)

    async def process_claims(self, league_id: str) -> List[WaiverClaim]:
        data = await self.client.post(f"/fantasy-leagues/{league_id}/waivers/process")
        return self.parse_list(WaiverClaim, data)
