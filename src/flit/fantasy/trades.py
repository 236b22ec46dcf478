"""Asset trades between league members."""

from datetime import timedelta
from typing import Callable, List, Optional, Sequence

from ..config.logging import get_logger, log_audit_event
from ..config.settings import get_settings
from ..exceptions import (
    InvalidStateError,
    PermissionDeniedError,
    ValidationException,
)
from .models import League, LeagueStatus, Trade, TradeStatus, utcnow
from .store import FantasyStore, new_id

logger = get_logger(__name__)


class TradeDesk:
    """Proposes and resolves trades, swapping slots between portfolios."""

    def __init__(
        self,
        store: FantasyStore,
        clock: Callable = utcnow,
        expiry_hours: Optional[int] = None,
    ):
        self.logger = logger.bind(component="trade_desk")
        self.store = store
        self.clock = clock
        self.expiry = timedelta(
            hours=expiry_hours if expiry_hours is not None else get_settings().trade_expiry_hours
        )

    def list_trades(self, league_id: str, user_id: Optional[str] = None) -> List[Trade]:
        self.store.get_league(league_id)
        trades = self.store.trades_for_league(league_id)
        if user_id is not None:
            trades = [t for t in trades if user_id in (t.proposer_id, t.recipient_id)]
        return sorted(trades, key=lambda t: t.created_at, reverse=True)

    def propose(
        self,
        league_id: str,
        proposer_id: str,
        recipient_id: str,
        offered_assets: Sequence[str],
        requested_assets: Sequence[str],
    ) -> Trade:
        """
        Propose exchanging ``offered_assets`` for ``requested_assets``.

        Raises:
            ValidationException: Members, ownership or asset lists are invalid
            InvalidStateError: League not active or past its trade deadline
        """
        league = self.store.get_league(league_id)
        self._check_trading_open(league)

        if proposer_id == recipient_id:
            raise ValidationException("You cannot trade with yourself")
        for user_id in (proposer_id, recipient_id):
            if not league.is_member(user_id):
                raise ValidationException(
                    f"User '{user_id}' is not a member of this league",
                    details={"user_id": user_id},
                )
        if not offered_assets and not requested_assets:
            raise ValidationException("A trade must include at least one asset")
        self._check_asset_lists(offered_assets, requested_assets)

        self._check_ownership(league_id, proposer_id, offered_assets)
        self._check_ownership(league_id, recipient_id, requested_assets)

        now = self.clock()
        trade = Trade(
            id=new_id("trade"),
            league_id=league_id,
            proposer_id=proposer_id,
            recipient_id=recipient_id,
            offered_assets=list(offered_assets),
            requested_assets=list(requested_assets),
            created_at=now,
            expires_at=now + self.expiry,
        )
        self.store.save_trade(trade)

        log_audit_event(
            "trade_proposed",
            user_id=proposer_id,
            league_id=league_id,
            trade_id=trade.id,
            recipient_id=recipient_id,
        )
        return trade

    def accept(self, league_id: str, trade_id: str, user_id: str) -> Trade:
        trade = self._pending_trade(league_id, trade_id)
        if user_id != trade.recipient_id:
            raise PermissionDeniedError("accept this trade", user_id)

        now = self.clock()
        if now >= trade.expires_at:
            raise InvalidStateError("Trade has expired", details={"trade_id": trade_id})

        league = self.store.get_league(league_id)
        self._check_trading_open(league)
        self._check_ownership(league_id, trade.proposer_id, trade.offered_assets)
        self._check_ownership(league_id, trade.recipient_id, trade.requested_assets)

        proposer = self.store.get_league_portfolio(league_id, trade.proposer_id)
        recipient = self.store.get_league_portfolio(league_id, trade.recipient_id)
        portfolios = {proposer.user_id: proposer, recipient.user_id: recipient}

        # Resolve every slot before moving any, so a bad trade changes nothing
        moves = []
        for move in trade.asset_moves():
            source = portfolios[move.from_user_id]
            slot = source.find_slot_by_asset(move.asset_id)
            if slot is None or any(slot is planned for _, _, planned in moves):
                raise ValidationException(
                    f"Asset '{move.asset_id}' cannot be moved twice in one trade",
                    details={"trade_id": trade_id, "asset_id": move.asset_id},
                )
            moves.append((source, portfolios[move.to_user_id], slot))

        for source, target, slot in moves:
            source.slots.remove(slot)
            target.slots.append(slot)

        return self._resolve(trade, TradeStatus.ACCEPTED, user_id)

    def reject(self, league_id: str, trade_id: str, user_id: str) -> Trade:
        trade = self._pending_trade(league_id, trade_id)
        if user_id != trade.recipient_id:
            raise PermissionDeniedError("reject this trade", user_id)
        return self._resolve(trade, TradeStatus.REJECTED, user_id)

    def cancel(self, league_id: str, trade_id: str, user_id: str) -> Trade:
        trade = self._pending_trade(league_id, trade_id)
        if user_id != trade.proposer_id:
            raise PermissionDeniedError("cancel this trade", user_id)
        return self._resolve(trade, TradeStatus.CANCELLED, user_id)

    def _resolve(self, trade: Trade, status: TradeStatus, user_id: str) -> Trade:
        trade.status = status
        trade.resolved_at = self.clock()
        log_audit_event(
            f"trade_{status.value}",
            user_id=user_id,
            league_id=trade.league_id,
            trade_id=trade.id,
        )
        return trade

    def _pending_trade(self, league_id: str, trade_id: str) -> Trade:
        trade = self.store.get_trade(trade_id)
        if trade.league_id != league_id:
            raise ValidationException(
                "Trade does not belong to this league",
                details={"trade_id": trade_id, "league_id": league_id},
            )
        if trade.status != TradeStatus.PENDING:
            raise InvalidStateError(
                f"Trade is already {trade.status.value}",
                details={"trade_id": trade_id, "status": trade.status.value},
            )
        return trade

    def _check_trading_open(self, league: League) -> None:
        if league.status != LeagueStatus.ACTIVE:
            raise InvalidStateError(
                "Trades are only allowed in active leagues",
                details={"league_id": league.id},
            )
        if league.current_week > league.settings.trade_deadline_week:
            raise InvalidStateError(
                "The trade deadline has passed",
                details={
                    "league_id": league.id,
                    "trade_deadline_week": league.settings.trade_deadline_week,
                },
            )

    @staticmethod
    def _check_asset_lists(
        offered_assets: Sequence[str], requested_assets: Sequence[str]
    ) -> None:
        for field, asset_ids in (
            ("offeredAssets", offered_assets),
            ("requestedAssets", requested_assets),
        ):
            if len(set(asset_ids)) != len(asset_ids):
                raise ValidationException(
                    "An asset is listed more than once",
                    field_errors={field: "duplicate asset"},
                )
        overlap = sorted(set(offered_assets) & set(requested_assets))
        if overlap:
            raise ValidationException(
                "An asset cannot be both offered and requested",
                details={"asset_ids": overlap},
            )

    def _check_ownership(
        self, league_id: str, user_id: str, asset_ids: Sequence[str]
    ) -> None:
        portfolio = self.store.find_portfolio(league_id, user_id)
        held = set(portfolio.asset_ids) if portfolio else set()
        not_owned = [asset_id for asset_id in asset_ids if asset_id not in held]
        if not_owned:
            raise ValidationException(
                f"User '{user_id}' does not own every asset in the trade",
                details={"user_id": user_id, "asset_ids": not_owned},
            )
