"""Matchup service."""

from typing import List, Optional

from ...fantasy.models import Matchup
from .base import FantasyService


class MatchupService(FantasyService):
    name = "matchup_service"

    async def get_current_matchup(self, league_id: str, user_id: str) -> Optional[Matchup]:
        data = await self.client.get_or_none(
            f"/fantasy-leagues/{league_id}/matchup/current", params={"userId": user_id}
        )
        return self.parse(Matchup, data)

    async def get_matchup_for_week(
        self, league_id: str, week: int, user_id: str
    ) -> Optional[Matchup]:
        data = await self.client.get_or_none(
            f"/fantasy-leagues/{league_id}/matchup/week/{week}",
            params={"userId": user_id},
        )
        return self.parse(Matchup, data)

    async def get_matchups_by_week(self, league_id: str, week: int) -> List[Matchup]:
        data = await self.client.get(f"/fantasy-leagues/{league_id}/matchups/week/{week}")
        return self.parse_list(Matchup, data)
