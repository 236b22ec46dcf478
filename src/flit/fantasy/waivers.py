"""Waiver wire: claiming unowned assets outside the draft."""

from typing import Callable, List, Optional

from ..config.logging import get_logger, log_audit_event
from ..exceptions import AssetLockedError, AssetUnavailableError, ValidationException
from .draft import eligible_for_league
from .models import (
    Asset,
    League,
    SlotStatus,
    WaiverClaim,
    WaiverPriority,
    WaiverStatus,
    utcnow,
)
from .store import FantasyStore, new_id

logger = get_logger(__name__)


class WaiverWire:
    """Accepts waiver claims and processes them in priority order."""

    def __init__(self, store: FantasyStore, clock: Callable = utcnow):
        self.logger = logger.bind(component="waiver_wire")
        self.store = store
        self.clock = clock

    def available_assets(
        self, league_id: str, query: Optional[str] = None, user_id: Optional[str] = None
    ) -> List[Asset]:
        """Assets not held in any portfolio of the league."""
        league = self.store.get_league(league_id)
        owned = {
            asset_id
            for portfolio in self.store.portfolios_for_league(league_id)
            for asset_id in portfolio.asset_ids
        }
        user = self.store.find_user(user_id) if user_id else None
        return [
            asset.view_for(user) if user_id else asset
            for asset in self.store.list_assets()
            if asset.id not in owned
            and eligible_for_league(asset, league)
            and asset.matches(query)
        ]

    def list_claims(self, league_id: str, user_id: Optional[str] = None) -> List[WaiverClaim]:
        self.store.get_league(league_id)
        claims = self.store.claims_for_league(league_id)
        if user_id is not None:
            claims = [c for c in claims if c.user_id == user_id]
        return claims

    def priority_for(self, league: League, user_id: str) -> int:
        """1-based waiver priority for ``user_id`` under the league's rule."""
        if league.settings.waiver_priority == WaiverPriority.ROLLING:
            order = league.waiver_order or league.member_ids
            return order.index(user_id) + 1 if user_id in order else len(order) + 1

        # Reverse standings: lowest total value claims first
        values = {}
        for member_id in league.member_ids:
            portfolio = self.store.find_portfolio(league.id, member_id)
            values[member_id] = portfolio.total_value if portfolio else 0.0
        ranking = sorted(league.member_ids, key=lambda uid: (values[uid], league.member_ids.index(uid)))
        return ranking.index(user_id) + 1

    def submit_claim(
        self,
        league_id: str,
        user_id: str,
        asset_id: str,
        drop_asset_id: Optional[str] = None,
    ) -> WaiverClaim:
        """
        File a claim for an unowned asset.

        Raises:
            ValidationException: User is not a member or does not own the drop asset
            AssetUnavailableError: Asset is owned or not eligible in the league
            AssetLockedError: User has not completed the asset's lessons
        """
        league = self.store.get_league(league_id)
        if not league.is_member(user_id):
            raise ValidationException(
                f"User '{user_id}' is not a member of this league",
                details={"user_id": user_id},
            )

        asset = self.store.get_asset(asset_id)
        if self.store.owner_of(league_id, asset_id) is not None:
            raise AssetUnavailableError(asset_id, reason="owned by another member")
        if not eligible_for_league(asset, league):
            raise AssetUnavailableError(asset_id, reason="not eligible in this league")

        missing = asset.missing_lessons(league.get_member(user_id))
        if missing:
            raise AssetLockedError(asset_id, missing)

        if drop_asset_id is not None and self.store.owner_of(league_id, drop_asset_id) != user_id:
            raise ValidationException(
                "You can only drop assets you own",
                field_errors={"dropAssetId": "not owned"},
            )

        claim = WaiverClaim(
            id=new_id("claim"),
            league_id=league_id,
            user_id=user_id,
            asset_id=asset_id,
            drop_asset_id=drop_asset_id,
            priority=self.priority_for(league, user_id),
            created_at=self.clock(),
        )
        self.store.save_waiver_claim(claim)

        log_audit_event(
            "waiver_claim_submitted",
            user_id=user_id,
            league_id=league_id,
            asset_id=asset_id,
            priority=claim.priority,
        )
        return claim

    def process_claims(self, league_id: str) -> List[WaiverClaim]:
        """
        Resolve pending claims in priority order (ties by submission time).

        Returns:
            The claims processed in this run, each ``processed`` or ``failed``
        """
        league = self.store.get_league(league_id)
        pending = sorted(
            (c for c in self.store.claims_for_league(league_id) if c.status == WaiverStatus.PENDING),
            key=lambda c: (c.priority, c.created_at),
        )

        for claim in pending:
            reason = self._apply(league, claim)
            claim.processed_at = self.clock()
            if reason is None:
                claim.status = WaiverStatus.PROCESSED
                if league.settings.waiver_priority == WaiverPriority.ROLLING:
                    league.waiver_order = [
                        uid for uid in league.waiver_order if uid != claim.user_id
                    ] + [claim.user_id]
            else:
                claim.status = WaiverStatus.FAILED
                claim.failure_reason = reason

        self.logger.info(
            "Processed waiver claims",
            league_id=league_id,
            processed=sum(1 for c in pending if c.status == WaiverStatus.PROCESSED),
            failed=sum(1 for c in pending if c.status == WaiverStatus.FAILED),
        )
        return pending

    def _apply(self, league: League, claim: WaiverClaim) -> Optional[str]:
        if self.store.owner_of(league.id, claim.asset_id) is not None:
            return "Asset is no longer available"

        portfolio = self.store.find_portfolio(league.id, claim.user_id)
        if portfolio is None:
            return "Claimant has no portfolio in this league"

        if claim.drop_asset_id is not None:
            drop_slot = portfolio.find_slot_by_asset(claim.drop_asset_id)
            if drop_slot is None:
                return "Drop asset is no longer owned"
            portfolio.slots.remove(drop_slot)
        elif len(portfolio.slots) >= league.settings.portfolio_size:
            return "Portfolio is full"

        portfolio.slots.append(
            self.store.new_slot(self.store.get_asset(claim.asset_id), SlotStatus.BENCH)
        )
        return None
