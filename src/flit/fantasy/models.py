"""Domain models for fantasy leagues, drafts, portfolios and matchups.

All models serialize with camelCase aliases so they round-trip with the REST
backend's JSON shapes.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class AssetType(str, Enum):
    STOCK = "Stock"
    ETF = "ETF"
    COMMODITY = "Commodity"
    REIT = "REIT"


class AssetTier(str, Enum):
    TIER_1 = "Tier 1"
    TIER_2 = "Tier 2"
    TIER_3 = "Tier 3"


class LeagueStatus(str, Enum):
    PENDING = "pending"
    PRE_DRAFT = "pre-draft"
    DRAFTING = "drafting"
    ACTIVE = "active"
    COMPLETED = "completed"


class DraftStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class SlotStatus(str, Enum):
    ACTIVE = "ACTIVE"
    BENCH = "BENCH"


class ScoringMethod(str, Enum):
    TOTAL_RETURN = "Total Return %"
    ABSOLUTE_GAIN = "Absolute Gain $"


class DraftType(str, Enum):
    SNAKE = "Snake"
    AUCTION = "Auction"


class MatchupType(str, Enum):
    HEAD_TO_HEAD = "Head-to-head"
    ROTISSERIE = "Rotisserie"


class WaiverPriority(str, Enum):
    ROLLING = "Rolling"
    REVERSE_STANDINGS = "Reverse Standings"


class TradeStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class WaiverStatus(str, Enum):
    PENDING = "pending"
    PROCESSED = "processed"
    FAILED = "failed"


class FantasyModel(BaseModel):
    """Base model using camelCase field aliases on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class User(FantasyModel):
    """A league member and learner."""

    id: str
    username: str
    name: str
    avatar: str = ""
    completed_lessons: List[str] = Field(default_factory=list)

    def complete_lesson(self, lesson_id: str) -> None:
        # Completion is append-only
        if lesson_id not in self.completed_lessons:
            self.completed_lessons.append(lesson_id)


class Asset(FantasyModel):
    """Draftable financial asset (reference data within a session)."""

    id: str
    ticker: str
    name: str
    type: AssetType
    tier: AssetTier
    current_price: float
    change_percent: float = 0.0
    market_cap: Optional[str] = None
    exchange: Optional[str] = None
    description: Optional[str] = None
    required_lessons: List[str] = Field(default_factory=list)
    is_locked: bool = False

    def missing_lessons(self, user: Optional[User]) -> List[str]:
        completed = set(user.completed_lessons) if user else set()
        return [lesson for lesson in self.required_lessons if lesson not in completed]

    def locked_for(self, user: Optional[User]) -> bool:
        return bool(self.missing_lessons(user))

    def view_for(self, user: Optional[User]) -> "Asset":
        """Copy of the asset with ``is_locked`` derived for ``user``."""
        return self.model_copy(update={"is_locked": self.locked_for(user)})

    def matches(self, query: Optional[str]) -> bool:
        """Case-insensitive ticker/name substring match."""
        if not query:
            return True
        needle = query.lower()
        return needle in self.ticker.lower() or needle in self.name.lower()


class LeagueSettings(FantasyModel):
    """Canonical league settings.

    The season/draft fields drive drafts, lineups, matchups, trades and
    waivers. The trading-competition fields (``starting_balance`` onwards) are
    optional and only used by the competition start flow. ``draft_date`` and
    ``start_date`` are independent.
    """

    league_size: int = Field(12, ge=2, le=32)
    season_length: int = Field(10, ge=1)
    draft_date: Optional[datetime] = None
    portfolio_size: int = Field(10, ge=1)
    active_slots: int = Field(7, ge=0)
    bench_slots: int = Field(3, ge=0)
    scoring_method: ScoringMethod = ScoringMethod.TOTAL_RETURN
    enabled_asset_classes: List[AssetType] = Field(
        default_factory=lambda: [AssetType.STOCK]
    )
    min_asset_price: float = Field(1.0, ge=0)
    draft_type: DraftType = DraftType.SNAKE
    draft_time_per_pick: int = Field(60, ge=1)
    matchup_type: MatchupType = MatchupType.HEAD_TO_HEAD
    playoffs_enabled: bool = True
    trade_deadline_week: int = Field(7, ge=0)
    waiver_priority: WaiverPriority = WaiverPriority.REVERSE_STANDINGS

    starting_balance: float = Field(10000.0, gt=0)
    start_date: Optional[datetime] = None
    competition_period: Optional[str] = None
    trading_enabled: bool = True
    allow_short_selling: bool = False


class League(FantasyModel):
    """A group of users competing under shared rules."""

    id: str
    name: str
    admin_user_id: str
    members: List[User] = Field(default_factory=list)
    settings: LeagueSettings = Field(default_factory=LeagueSettings)
    status: LeagueStatus = LeagueStatus.PRE_DRAFT
    current_week: int = 0
    join_code: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    waiver_order: List[str] = Field(default_factory=list)

    @property
    def member_ids(self) -> List[str]:
        return [member.id for member in self.members]

    @property
    def settings_locked(self) -> bool:
        return self.status not in (LeagueStatus.PENDING, LeagueStatus.PRE_DRAFT)

    def is_member(self, user_id: str) -> bool:
        return user_id in self.member_ids

    def get_member(self, user_id: str) -> Optional[User]:
        for member in self.members:
            if member.id == user_id:
                return member
        return None


class Membership(FantasyModel):
    league_id: str
    user_id: str
    joined_at: datetime = Field(default_factory=utcnow)


class PortfolioSlot(FantasyModel):
    """A position in a fantasy portfolio holding one asset."""

    id: str
    asset_id: str
    asset: Optional[Asset] = None
    status: SlotStatus = SlotStatus.BENCH
    acquired_at: datetime = Field(default_factory=utcnow)
    shares: float = 1.0
    purchase_price: float
    current_value: float

    @computed_field(alias="gainLossPercent")
    @property
    def gain_loss_percent(self) -> float:
        if not self.purchase_price:
            return 0.0
        return (self.current_value - self.purchase_price) / self.purchase_price * 100


class Portfolio(FantasyModel):
    """A member's portfolio within one league."""

    id: str
    league_id: str
    user_id: str
    name: str
    slots: List[PortfolioSlot] = Field(default_factory=list)
    cash_balance: float = 0.0
    weekly_return: float = 0.0

    @computed_field(alias="totalValue")
    @property
    def total_value(self) -> float:
        return self.cash_balance + sum(slot.current_value for slot in self.slots)

    @property
    def active_slots(self) -> List[PortfolioSlot]:
        return [slot for slot in self.slots if slot.status == SlotStatus.ACTIVE]

    @property
    def bench_slots(self) -> List[PortfolioSlot]:
        return [slot for slot in self.slots if slot.status == SlotStatus.BENCH]

    @property
    def asset_ids(self) -> List[str]:
        return [slot.asset_id for slot in self.slots]

    def find_slot_by_asset(self, asset_id: str) -> Optional[PortfolioSlot]:
        for slot in self.slots:
            if slot.asset_id == asset_id:
                return slot
        return None


class DraftPick(FantasyModel):
    """Immutable record of one draft selection."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    round: int
    pick_number: int
    user_id: str
    asset_id: str
    timestamp: datetime = Field(default_factory=utcnow)


class DraftState(FantasyModel):
    """Draft progress for one league."""

    league_id: str
    status: DraftStatus = DraftStatus.PENDING
    current_round: int = 1
    current_pick_number: int = 1
    current_user_id: Optional[str] = None
    picks: List[DraftPick] = Field(default_factory=list)
    remaining_time_seconds: int = 60

    @property
    def picked_asset_ids(self) -> set:
        return {pick.asset_id for pick in self.picks}


class Matchup(FantasyModel):
    """Weekly head-to-head pairing of two members' portfolios."""

    id: str
    league_id: str
    week: int
    user_a_id: str
    user_b_id: str
    score_a: float = 0.0
    score_b: float = 0.0
    winner_id: Optional[str] = None
    user_a_portfolio_name: str = ""
    user_b_portfolio_name: str = ""
    user_a_avatar: str = ""
    user_b_avatar: str = ""

    def involves(self, user_id: str) -> bool:
        return user_id in (self.user_a_id, self.user_b_id)


class TradeAsset(FantasyModel):
    asset_id: str
    from_user_id: str
    to_user_id: str


class Trade(FantasyModel):
    """Proposal to exchange assets between two members."""

    id: str
    league_id: str
    proposer_id: str
    recipient_id: str
    status: TradeStatus = TradeStatus.PENDING
    offered_assets: List[str] = Field(default_factory=list)
    requested_assets: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime
    resolved_at: Optional[datetime] = None

    def asset_moves(self) -> List[TradeAsset]:
        moves = [
            TradeAsset(
                asset_id=asset_id,
                from_user_id=self.proposer_id,
                to_user_id=self.recipient_id,
            )
            for asset_id in self.offered_assets
        ]
        moves.extend(
            TradeAsset(
                asset_id=asset_id,
                from_user_id=self.recipient_id,
                to_user_id=self.proposer_id,
            )
            for asset_id in self.requested_assets
        )
        return moves


class WaiverClaim(FantasyModel):
    """Request to acquire an unowned asset outside the draft."""

    id: str
    league_id: str
    user_id: str
    asset_id: str
    drop_asset_id: Optional[str] = None
    status: WaiverStatus = WaiverStatus.PENDING
    priority: int = 1
    created_at: datetime = Field(default_factory=utcnow)
    processed_at: Optional[datetime] = None
    failure_reason: Optional[str] = None


class JoinLeagueResult(FantasyModel):
    league: League
    membership: Membership


class LeaveLeagueResult(FantasyModel):
    message: str
    league_deleted: bool
