"""In-process repository for fantasy league state, keyed by league."""

from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..config.logging import get_logger
from ..data import load_seed_data
from ..exceptions import NotFoundError
from .models import (
    Asset,
    DraftState,
    DraftStatus,
    League,
    LeagueStatus,
    Matchup,
    Portfolio,
    PortfolioSlot,
    Trade,
    User,
    WaiverClaim,
)

logger = get_logger(__name__)


def new_id(prefix: str) -> str:
    """Generate a short unique identifier such as ``league_1a2b3c4d``."""
    return f"{prefix}_{uuid4().hex[:8]}"


class FantasyStore:
    """Explicit store object holding every league-scoped record.

    One store is shared by the managers operating on it; tests create their
    own instance so no state leaks between them.
    """

    def __init__(self):
        self.logger = logger.bind(component="fantasy_store")
        self.assets: Dict[str, Asset] = {}
        self.users: Dict[str, User] = {}
        self.leagues: Dict[str, League] = {}
        self.draft_states: Dict[str, DraftState] = {}
        self.portfolios: Dict[str, Portfolio] = {}
        self.matchups: Dict[str, Matchup] = {}
        self.trades: Dict[str, Trade] = {}
        self.waiver_claims: Dict[str, WaiverClaim] = {}

    @classmethod
    def from_seed(cls, data: Optional[Dict[str, Any]] = None) -> "FantasyStore":
        """Build a store populated from the packaged mock catalogue."""
        data = data if data is not None else load_seed_data()
        store = cls()

        for raw in data.get("assets", []):
            store.add_asset(Asset.model_validate(raw))

        for raw in data.get("users", []):
            store.add_user(User.model_validate(raw))

        for raw in data.get("leagues", []):
            raw = dict(raw)
            member_ids = raw.pop("memberIds", [])
            league = League.model_validate(raw)
            league.members = [store.get_user(user_id) for user_id in member_ids]
            league.waiver_order = list(member_ids)
            store.add_league(league)

            draft_status = (
                DraftStatus.PENDING
                if league.status in (LeagueStatus.PENDING, LeagueStatus.PRE_DRAFT)
                else DraftStatus.COMPLETED
            )
            store.save_draft_state(
                DraftState(
                    league_id=league.id,
                    status=draft_status,
                    remaining_time_seconds=league.settings.draft_time_per_pick,
                )
            )

        for raw in data.get("portfolios", []):
            portfolio = Portfolio.model_validate(raw)
            for slot in portfolio.slots:
                slot.asset = store.find_asset(slot.asset_id)
            store.save_portfolio(portfolio)

        for raw in data.get("matchups", []):
            store.save_matchup(Matchup.model_validate(raw))

        store.logger.info(
            "Loaded seed data",
            assets=len(store.assets),
            users=len(store.users),
            leagues=len(store.leagues),
            portfolios=len(store.portfolios),
        )
        return store

    # Assets

    def add_asset(self, asset: Asset) -> Asset:
        self.assets[asset.id] = asset
        return asset

    def find_asset(self, asset_id: str) -> Optional[Asset]:
        return self.assets.get(asset_id)

    def get_asset(self, asset_id: str) -> Asset:
        asset = self.assets.get(asset_id)
        if asset is None:
            raise NotFoundError("Asset", asset_id)
        return asset

    def find_asset_by_ticker(self, ticker: str) -> Optional[Asset]:
        for asset in self.assets.values():
            if asset.ticker.upper() == ticker.upper():
                return asset
        return None

    def list_assets(self) -> List[Asset]:
        return list(self.assets.values())

    # Users

    def add_user(self, user: User) -> User:
        self.users[user.id] = user
        return user

    def find_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_user(self, user_id: str) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    # Leagues

    def add_league(self, league: League) -> League:
        self.leagues[league.id] = league
        return league

    def find_league(self, league_id: str) -> Optional[League]:
        return self.leagues.get(league_id)

    def get_league(self, league_id: str) -> League:
        league = self.leagues.get(league_id)
        if league is None:
            raise NotFoundError("League", league_id)
        return league

    def find_league_by_join_code(self, join_code: str) -> Optional[League]:
        for league in self.leagues.values():
            if league.join_code and league.join_code.upper() == join_code.upper():
                return league
        return None

    def list_leagues(self) -> List[League]:
        return list(self.leagues.values())

    def delete_league(self, league_id: str) -> None:
        """Delete a league and every record scoped to it."""
        self.leagues.pop(league_id, None)
        self.draft_states.pop(league_id, None)
        for records in (
            self.portfolios,
            self.matchups,
            self.trades,
            self.waiver_claims,
        ):
            for record_id in [
                key for key, value in records.items() if value.league_id == league_id
            ]:
                del records[record_id]

        self.logger.info("Deleted league", league_id=league_id)

    # Drafts

    def save_draft_state(self, state: DraftState) -> DraftState:
        self.draft_states[state.league_id] = state
        return state

    def get_draft_state(self, league_id: str) -> DraftState:
        state = self.draft_states.get(league_id)
        if state is None:
            raise NotFoundError("DraftState", league_id)
        return state

    # Portfolios

    def save_portfolio(self, portfolio: Portfolio) -> Portfolio:
        self.portfolios[portfolio.id] = portfolio
        return portfolio

    def get_portfolio(self, portfolio_id: str) -> Portfolio:
        portfolio = self.portfolios.get(portfolio_id)
        if portfolio is None:
            raise NotFoundError("Portfolio", portfolio_id)
        return portfolio

    def find_portfolio(self, league_id: str, user_id: str) -> Optional[Portfolio]:
        for portfolio in self.portfolios.values():
            if portfolio.league_id == league_id and portfolio.user_id == user_id:
                return portfolio
        return None

    def get_league_portfolio(self, league_id: str, user_id: str) -> Portfolio:
        portfolio = self.find_portfolio(league_id, user_id)
        if portfolio is None:
            raise NotFoundError("Portfolio", f"{league_id}/{user_id}")
        return portfolio

    def portfolios_for_league(self, league_id: str) -> List[Portfolio]:
        return [p for p in self.portfolios.values() if p.league_id == league_id]

    def delete_portfolio(self, league_id: str, user_id: str) -> None:
        portfolio = self.find_portfolio(league_id, user_id)
        if portfolio is not None:
            del self.portfolios[portfolio.id]

    def owner_of(self, league_id: str, asset_id: str) -> Optional[str]:
        """User id holding ``asset_id`` in the league, if any."""
        for portfolio in self.portfolios_for_league(league_id):
            if portfolio.find_slot_by_asset(asset_id) is not None:
                return portfolio.user_id
        return None

    def new_slot(self, asset: Asset, status) -> PortfolioSlot:
        return PortfolioSlot(
            id=new_id("slot"),
            asset_id=asset.id,
            asset=asset,
            status=status,
            purchase_price=asset.current_price,
            current_value=asset.current_price,
        )

    # Matchups

    def save_matchup(self, matchup: Matchup) -> Matchup:
        self.matchups[matchup.id] = matchup
        return matchup

    def matchups_for_week(self, league_id: str, week: int) -> List[Matchup]:
        return [
            m
            for m in self.matchups.values()
            if m.league_id == league_id and m.week == week
        ]

    # Trades

    def save_trade(self, trade: Trade) -> Trade:
        self.trades[trade.id] = trade
        return trade

    def get_trade(self, trade_id: str) -> Trade:
        trade = self.trades.get(trade_id)
        if trade is None:
            raise NotFoundError("Trade", trade_id)
        return trade

    def trades_for_league(self, league_id: str) -> List[Trade]:
        return [t for t in self.trades.values() if t.league_id == league_id]

    # Waivers

    def save_waiver_claim(self, claim: WaiverClaim) -> WaiverClaim:
        self.waiver_claims[claim.id] = claim
        return claim

    def claims_for_league(self, league_id: str) -> List[WaiverClaim]:
        return [c for c in self.waiver_claims.values() if c.league_id == league_id]
