"""League service."""

from typing import List, Optional

from ...fantasy.models import (
    JoinLeagueResult,
    League,
    LeagueSettings,
    LeaveLeagueResult,
    User,
)
from .base import FantasyService


class LeagueService(FantasyService):
    """League lifecycle calls against the backend."""

    name = "league_service"

    async def get_leagues(self, user_id: Optional[str] = None) -> List[League]:
        data = await self.client.get("/fantasy-leagues", params={"userId": user_id})
        return self.parse_list(League, data)

    async def get_league_by_id(self, league_id: str) -> Optional[League]:
        """Fetch a league; returns None when it does not exist."""
        data = await self.client.get_or_none(f"/fantasy-leagues/{league_id}")
        return self.parse(League, data)

    async def create_league(
        self,
        name: str,
        admin_user_id: str,
        settings: Optional[LeagueSettings] = None,
    ) -> League:
        payload = {
            "name": name,
            "adminUserId": admin_user_id,
            "settings": (
                settings.model_dump(by_alias=True, mode="json") if settings else None
            ),
        }
        league = self.parse(League, await self.client.post("/fantasy-leagues", json=payload))
        self.logger.info("League created", league_id=league.id, join_code=league.join_code)
        return league

    async def start_league(self, league_id: str, user_id: str) -> None:
        await self.client.post(
            f"/fantasy-leagues/{league_id}/start", json={"userId": user_id}
        )

    async def join_by_code(self, join_code: str, user_id: str) -> JoinLeagueResult:
        data = await self.client.post(
            "/fantasy-leagues/join-by-code",
            json={"joinCode": join_code, "userId": user_id},
        )
        return self.parse(JoinLeagueResult, data)

    async def leave_league(self, league_id: str, user_id: str) -> LeaveLeagueResult:
        data = await self.client.delete(
            f"/fantasy-leagues/{league_id}/leave", json={"userId": user_id}
        )
        return self.parse(LeaveLeagueResult, data)

    async def update_settings(
        self, league_id: str, user_id: str, settings: LeagueSettings
    ) -> League:
        data = await self.client.put(
            f"/fantasy-leagues/{league_id}/settings",
            json={
                "userId": user_id,
                "settings": settings.model_dump(by_alias=True, mode="json"),
            },
        )
        return self.parse(League, data)

    async def complete_lesson(self, user_id: str, lesson_id: str) -> User:
        data = await self.client.post(f"/users/{user_id}/lessons/{lesson_id}")
        return self.parse(User, data)
