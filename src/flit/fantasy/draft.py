"""Draft turn scheduling: whose pick it is, pick validation and rotation."""

from typing import Callable, List, Optional

from ..config.logging import get_logger, log_audit_event
from ..exceptions import (
    AssetLockedError,
    AssetUnavailableError,
    InvalidStateError,
    InvalidTurnError,
    NotFoundError,
)
from .models import (
    Asset,
    DraftPick,
    DraftState,
    DraftStatus,
    DraftType,
    League,
    LeagueStatus,
    Portfolio,
    SlotStatus,
    utcnow,
)
from .store import FantasyStore, new_id

logger = get_logger(__name__)

DRAFTABLE_LEAGUE_STATUSES = (LeagueStatus.PENDING, LeagueStatus.PRE_DRAFT)


def eligible_for_league(asset: Asset, league: League) -> bool:
    """Whether the league's asset-class and minimum-price settings admit ``asset``."""
    settings = league.settings
    if settings.enabled_asset_classes and asset.type not in settings.enabled_asset_classes:
        return False
    return asset.current_price >= settings.min_asset_price


class DraftScheduler:
    """Turn scheduler for league drafts.

    Rotation follows the league's member order. Snake drafts reverse the
    order on even rounds; every other draft type uses plain round-robin.
    """

    def __init__(self, store: FantasyStore, clock: Callable = utcnow):
        self.logger = logger.bind(component="draft_scheduler")
        self.store = store
        self.clock = clock

    def get_draft_state(self, league_id: str) -> DraftState:
        self.store.get_league(league_id)
        return self.store.get_draft_state(league_id)

    def total_picks(self, league: League) -> int:
        return len(league.members) * league.settings.portfolio_size

    def user_on_clock(self, league: League, round_number: int, pick_number: int) -> str:
        """Member id picking at ``pick_number`` of ``round_number``."""
        order = league.member_ids
        index = pick_number - 1
        if league.settings.draft_type == DraftType.SNAKE and round_number % 2 == 0:
            index = len(order) - pick_number
        return order[index]

    def start_draft(self, league_id: str) -> DraftState:
        """Move a pending draft to active with the first member on the clock."""
        league = self.store.get_league(league_id)
        state = self.store.get_draft_state(league_id)

        if state.status != DraftStatus.PENDING:
            raise InvalidStateError(
                f"Draft cannot be started from status '{state.status.value}'",
                details={"league_id": league_id, "status": state.status.value},
            )
        if league.status not in DRAFTABLE_LEAGUE_STATUSES:
            raise InvalidStateError(
                f"League in status '{league.status.value}' cannot hold a draft",
                details={"league_id": league_id, "league_status": league.status.value},
            )
        if not league.members:
            raise InvalidStateError(
                "Draft cannot start without members", details={"league_id": league_id}
            )

        state.status = DraftStatus.ACTIVE
        state.current_round = 1
        state.current_pick_number = 1
        state.current_user_id = self.user_on_clock(league, 1, 1)
        state.remaining_time_seconds = league.settings.draft_time_per_pick
        league.status = LeagueStatus.DRAFTING

        self.logger.info(
            "Draft started",
            league_id=league_id,
            members=len(league.members),
            total_picks=self.total_picks(league),
            draft_type=league.settings.draft_type.value,
        )
        return state

    def pause_draft(self, league_id: str) -> DraftState:
        state = self.get_draft_state(league_id)
        if state.status != DraftStatus.ACTIVE:
            raise InvalidStateError("Only an active draft can be paused")
        state.status = DraftStatus.PAUSED
        return state

    def resume_draft(self, league_id: str) -> DraftState:
        league = self.store.get_league(league_id)
        state = self.store.get_draft_state(league_id)
        if state.status != DraftStatus.PAUSED:
            raise InvalidStateError("Only a paused draft can be resumed")
        state.status = DraftStatus.ACTIVE
        state.remaining_time_seconds = league.settings.draft_time_per_pick
        return state

    def get_draftable_assets(
        self,
        league_id: str,
        query: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> List[Asset]:
        """
        Assets nobody has drafted yet in this league.

        Args:
            league_id: League identifier
            query: Optional case-insensitive ticker/name substring
            user_id: When given, ``is_locked`` is derived for this user

        Returns:
            List of asset views
        """
        league = self.store.get_league(league_id)
        state = self.store.get_draft_state(league_id)
        picked = state.picked_asset_ids
        user = self.store.find_user(user_id) if user_id else None

        return [
            asset.view_for(user) if user_id else asset
            for asset in self.store.list_assets()
            if asset.id not in picked
            and eligible_for_league(asset, league)
            and asset.matches(query)
        ]

    def make_pick(self, league_id: str, user_id: str, asset_id: str) -> DraftPick:
        """
        Record a pick for the member on the clock and advance the draft.

        Raises:
            InvalidStateError: Draft is not active
            InvalidTurnError: ``user_id`` is not on the clock
            AssetUnavailableError: Asset already picked or not eligible
            AssetLockedError: User has not completed the asset's lessons
        """
        league = self.store.get_league(league_id)
        state = self.store.get_draft_state(league_id)

        if state.status != DraftStatus.ACTIVE:
            raise InvalidStateError(
                f"Draft is not active (status '{state.status.value}')",
                details={"league_id": league_id, "status": state.status.value},
            )
        if user_id != state.current_user_id:
            raise InvalidTurnError(user_id, state.current_user_id)

        asset = self.store.find_asset(asset_id)
        if asset is None:
            raise NotFoundError("Asset", asset_id)
        if asset_id in state.picked_asset_ids:
            raise AssetUnavailableError(asset_id, reason="already picked")
        if not eligible_for_league(asset, league):
            raise AssetUnavailableError(asset_id, reason="not eligible in this league")

        missing = asset.missing_lessons(league.get_member(user_id))
        if missing:
            raise AssetLockedError(asset_id, missing)

        pick = DraftPick(
            round=state.current_round,
            pick_number=state.current_pick_number,
            user_id=user_id,
            asset_id=asset_id,
            timestamp=self.clock(),
        )
        state.picks.append(pick)
        self._advance(league, state)

        log_audit_event(
            "draft_pick",
            user_id=user_id,
            league_id=league_id,
            asset_id=asset_id,
            round=pick.round,
            pick_number=pick.pick_number,
        )
        return pick

    def _advance(self, league: League, state: DraftState) -> None:
        state.current_pick_number += 1
        if state.current_pick_number > len(league.members):
            state.current_round += 1
            state.current_pick_number = 1

        if len(state.picks) >= self.total_picks(league):
            # current_user_id stays on the final picker
            state.status = DraftStatus.COMPLETED
            state.remaining_time_seconds = 0
            self._complete(league, state)
            return

        state.current_user_id = self.user_on_clock(
            league, state.current_round, state.current_pick_number
        )
        state.remaining_time_seconds = league.settings.draft_time_per_pick

    def _complete(self, league: League, state: DraftState) -> None:
        league.status = LeagueStatus.ACTIVE
        league.current_week = 1

        for member in league.members:
            portfolio = self.store.find_portfolio(league.id, member.id)
            if portfolio is None:
                portfolio = Portfolio(
                    id=new_id("portfolio"),
                    league_id=league.id,
                    user_id=member.id,
                    name=f"{member.name}'s Portfolio",
                )

            member_picks = [pick for pick in state.picks if pick.user_id == member.id]
            portfolio.slots = [
                self.store.new_slot(
                    self.store.get_asset(pick.asset_id),
                    (
                        SlotStatus.ACTIVE
                        if index < league.settings.active_slots
                        else SlotStatus.BENCH
                    ),
                )
                for index, pick in enumerate(member_picks)
            ]
            self.store.save_portfolio(portfolio)

        self.logger.info(
            "Draft completed",
            league_id=league.id,
            picks=len(state.picks),
            rounds=state.current_round - 1,
        )
