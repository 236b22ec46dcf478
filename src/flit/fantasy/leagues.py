"""League lifecycle: creation, membership, competition start and settings."""

import secrets
import string
from typing import Callable, List, Optional

from ..config.logging import get_logger, log_audit_event
from ..exceptions import (
    InvalidJoinCodeError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    ValidationException,
)
from .models import (
    Asset,
    DraftState,
    DraftStatus,
    JoinLeagueResult,
    League,
    LeagueSettings,
    LeagueStatus,
    LeaveLeagueResult,
    Membership,
    Portfolio,
    User,
    utcnow,
)
from .store import FantasyStore, new_id

logger = get_logger(__name__)

JOIN_CODE_LENGTH = 6
JOIN_CODE_ALPHABET = string.ascii_uppercase + string.digits

OPEN_STATUSES = (LeagueStatus.PENDING, LeagueStatus.PRE_DRAFT)


class LeagueManager:
    """Creates leagues and manages their membership and lifecycle."""

    def __init__(self, store: FantasyStore, clock: Callable = utcnow):
        self.logger = logger.bind(component="league_manager")
        self.store = store
        self.clock = clock

    def list_leagues(self, user_id: Optional[str] = None) -> List[League]:
        leagues = self.store.list_leagues()
        if user_id is None:
            return leagues
        return [league for league in leagues if league.is_member(user_id)]

    def get_league(self, league_id: str) -> League:
        return self.store.get_league(league_id)

    def create_league(
        self, name: str, admin_user_id: str, settings: Optional[LeagueSettings] = None
    ) -> League:
        """
        Create a league with its admin as first member and a pending draft.

        Args:
            name: League name
            admin_user_id: Creating user, becomes admin
            settings: League settings (defaults when omitted)

        Returns:
            The new league
        """
        if not name or not name.strip():
            raise ValidationException(
                "Please enter a league name", field_errors={"name": "required"}
            )

        admin = self.store.get_user(admin_user_id)
        settings = settings or LeagueSettings()

        league = League(
            id=new_id("league"),
            name=name.strip(),
            admin_user_id=admin.id,
            members=[admin],
            settings=settings,
            status=LeagueStatus.PRE_DRAFT,
            current_week=0,
            join_code=self._generate_join_code(),
            created_at=self.clock(),
            waiver_order=[admin.id],
        )
        self.store.add_league(league)
        self.store.save_draft_state(
            DraftState(
                league_id=league.id,
                status=DraftStatus.PENDING,
                remaining_time_seconds=settings.draft_time_per_pick,
            )
        )

        log_audit_event("league_created", user_id=admin.id, league_id=league.id)
        self.logger.info(
            "Created league",
            league_id=league.id,
            name=league.name,
            league_size=settings.league_size,
        )
        return league

    def join_by_code(self, join_code: str, user_id: str) -> JoinLeagueResult:
        """
        Join a league using its 6-character code.

        Returns:
            The joined league and the new membership
        """
        code = (join_code or "").strip()
        if len(code) != JOIN_CODE_LENGTH:
            raise InvalidJoinCodeError(code)

        league = self.store.find_league_by_join_code(code)
        if league is None:
            raise NotFoundError("League", code)

        user = self.store.get_user(user_id)

        if league.status not in OPEN_STATUSES:
            raise InvalidStateError(
                "League has already started", details={"league_id": league.id}
            )
        if league.is_member(user.id):
            raise ValidationException("You are already a member of this league")
        if len(league.members) >= league.settings.league_size:
            raise ValidationException("League is full")

        league.members.append(user)
        league.waiver_order.append(user.id)
        membership = Membership(league_id=league.id, user_id=user.id, joined_at=self.clock())

        log_audit_event("league_joined", user_id=user.id, league_id=league.id)
        return JoinLeagueResult(league=league, membership=membership)

    def leave_league(self, league_id: str, user_id: str) -> LeaveLeagueResult:
        """
        Remove a member, deleting the league when nobody remains.

        Returns:
            Message for the user and whether the league was deleted
        """
        league = self.store.get_league(league_id)
        if not league.is_member(user_id):
            raise NotFoundError("Membership", f"{league_id}/{user_id}")
        if league.status == LeagueStatus.DRAFTING:
            # The pick order and pick total are fixed for the whole draft
            raise InvalidStateError(
                "You cannot leave a league while its draft is running",
                details={"league_id": league_id},
            )

        league.members = [m for m in league.members if m.id != user_id]
        league.waiver_order = [uid for uid in league.waiver_order if uid != user_id]
        self.store.delete_portfolio(league_id, user_id)

        log_audit_event("league_left", user_id=user_id, league_id=league_id)

        if not league.members:
            self.store.delete_league(league_id)
            return LeaveLeagueResult(
                message="You left the league. The league was deleted as no members remain.",
                league_deleted=True,
            )

        if league.admin_user_id == user_id:
            league.admin_user_id = league.members[0].id
            self.logger.info(
                "League admin reassigned",
                league_id=league_id,
                admin_user_id=league.admin_user_id,
            )

        return LeaveLeagueResult(
            message="You have successfully left the league.", league_deleted=False
        )

    def start_competition(self, league_id: str, user_id: str) -> League:
        """Admin-only start of a trading competition with cash portfolios."""
        league = self.store.get_league(league_id)
        if league.admin_user_id != user_id:
            raise PermissionDeniedError("start the competition", user_id)
        if league.status not in OPEN_STATUSES:
            raise InvalidStateError(
                f"League cannot be started from status '{league.status.value}'",
                details={"league_id": league_id},
            )

        league.status = LeagueStatus.ACTIVE
        league.current_week = 1
        league.settings.start_date = self.clock()

        for member in league.members:
            if self.store.find_portfolio(league.id, member.id) is None:
                self.store.save_portfolio(
                    Portfolio(
                        id=new_id("portfolio"),
                        league_id=league.id,
                        user_id=member.id,
                        name=f"{member.name}'s Portfolio",
                        cash_balance=league.settings.starting_balance,
                    )
                )

        log_audit_event("competition_started", user_id=user_id, league_id=league_id)
        return league

    def update_settings(
        self, league_id: str, user_id: str, settings: LeagueSettings
    ) -> League:
        league = self.store.get_league(league_id)
        if league.admin_user_id != user_id:
            raise PermissionDeniedError("change league settings", user_id)
        if league.settings_locked:
            raise InvalidStateError(
                "League settings are frozen once the league has started",
                details={"league_id": league_id},
            )
        league.settings = settings
        return league

    def complete_lesson(self, user_id: str, lesson_id: str) -> User:
        user = self.store.get_user(user_id)
        user.complete_lesson(lesson_id)
        return user

    def asset_view_for(self, asset: Asset, user_id: Optional[str]) -> Asset:
        user = self.store.find_user(user_id) if user_id else None
        return asset.view_for(user)

    def _generate_join_code(self) -> str:
        while True:
            code = "".join(
                secrets.choice(JOIN_CODE_ALPHABET) for _ in range(JOIN_CODE_LENGTH)
            )
            if self.store.find_league_by_join_code(code) is None:
                return code
