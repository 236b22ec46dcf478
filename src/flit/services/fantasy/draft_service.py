"""Draft service."""

from typing import Callable, List, Optional

from ...events import EventBus
from ...fantasy.models import Asset, DraftPick, DraftState
from ...fantasy.polling import DraftWatcher
from .base import FantasyService


class DraftService(FantasyService):
    """Draft room calls against the backend."""

    name = "draft_service"

    async def get_draft_state(self, league_id: str) -> Optional[DraftState]:
        data = await self.client.get_or_none(f"/fantasy-leagues/{league_id}/draft")
        return self.parse(DraftState, data)

    async def start_draft(self, league_id: str) -> DraftState:
        data = await self.client.post(f"/fantasy-leagues/{league_id}/draft/start")
        return self.parse(DraftState, data)

    async def make_pick(self, league_id: str, user_id: str, asset_id: str) -> DraftPick:
        data = await self.client.post(
            f"/fantasy-leagues/{league_id}/draft/pick",
            json={"userId": user_id, "assetId": asset_id},
        )
        pick = self.parse(DraftPick, data)
        self.logger.info(
            "Pick made",
            league_id=league_id,
            user_id=user_id,
            asset_id=asset_id,
            round=pick.round,
            pick_number=pick.pick_number,
        )
        return pick

    async def get_draftable_assets(
        self,
        league_id: str,
        query: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> List[Asset]:
        data = await self.client.get(
            f"/fantasy-leagues/{league_id}/draft/assets",
            params={"search": query or None, "userId": user_id},
        )
        return self.parse_list(Asset, data)

    def watch(
        self,
        league_id: str,
        event_bus: Optional[EventBus] = None,
        interval_seconds: Optional[int] = None,
        on_change: Optional[Callable[[DraftState], None]] = None,
    ) -> DraftWatcher:
        """Draft watcher polling this league's state through this service."""
        return DraftWatcher(
            league_id,
            lambda: self.get_draft_state(league_id),
            event_bus=event_bus,
            interval_seconds=interval_seconds,
            on_change=on_change,
        )
