"""Trade service."""

from typing import List, Optional, Sequence

from ...fantasy.models import Trade
from .base import FantasyService


class TradeService(FantasyService):
    name = "trade_service"

    async def get_trades(self, league_id: str, user_id: Optional[str] = None) -> List[Trade]:
        data = await self.client.get(
            f"/fantasy-leagues/{league_id}/trades", params={"userId": user_id}
        )
        return self.parse_list(Trade, data)

    async def propose_trade(
        self,
        league_id: str,
        proposer_id: str,
        recipient_id: str,
        offered_assets: Sequence[str],
        requested_assets: Sequence[str],
    ) -> Trade:
        data = await self.client.post(
            f"/fantasy-leagues/{league_id}/trades",
            json={
                "proposerId": proposer_id,
                "recipientId": recipient_id,
                "offeredAssets": list(offered_assets),
                "requestedAssets": list(requested_assets),
            },
        )
        return self.parse(Trade, data)

    async def _act(self, league_id: str, trade_id: str, action: str, user_id: str) -> Trade:
        data = await self.client.post(
            f"/fantasy-leagues/{league_id}/trades/{trade_id}/{action}",
            json={"userId": user_id},
        )
        return self.parse(Trade, data)

    async def accept_trade(self, league_id: str, trade_id: str, user_id: str) -> Trade:
        return await self._act(league_id, trade_id, "accept", user_id)

    async def reject_trade(self, league_id: str, trade_id: str, user_id: str) -> Trade:
        return await self._act(league_id, trade_id, "reject", user_id)

    async def cancel_trade(self, league_id: str, trade_id: str, user_id: str) -> Trade:
        return await self._act(league_id, trade_id, "cancel", user_id)
