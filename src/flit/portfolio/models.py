"""Learning-portfolio models: cash pools, allocation buckets and stock holdings.

Money amounts are ``Decimal`` so weighted-average costs compare exactly.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ZERO = Decimal("0")


class TimeFrame(str, Enum):
    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    ONE_YEAR = "1Y"
    FIVE_YEARS = "5Y"
    YEAR_TO_DATE = "YTD"
    ALL = "ALL"


class LearningModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PortfolioSnapshot(LearningModel):
    """One point of a value time series."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    timestamp: datetime
    value: float


class Stock(LearningModel):
    """Buyable stock from the learning catalogue."""

    symbol: str
    name: str
    current_price: Decimal
    change_percent: float = 0.0
    sector: str = ""
    required_lessons: List[str] = Field(default_factory=list)

    def matches(self, query: Optional[str]) -> bool:
        if not query:
            return True
        needle = query.lower()
        return needle in self.symbol.lower() or needle in self.name.lower()


class StockHolding(LearningModel):
    symbol: str
    name: str
    shares: Decimal
    average_price: Decimal
    current_price: Decimal
    total_value: Decimal
    change_percent: float = 0.0
    cost_basis: Optional[Decimal] = None

    @property
    def total_cost(self) -> Decimal:
        """Amount paid for all shares; ``average_price * shares`` when untracked."""
        if self.cost_basis is not None:
            return self.cost_basis
        return self.average_price * self.shares


class AssetAllocation(LearningModel):
    """Cash moved into labelled savings buckets."""

    savings: Decimal = ZERO
    bonds: Decimal = ZERO
    index_funds: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.savings + self.bonds + self.index_funds


ASSET_CLASSES = {
    "savings": "savings",
    "bonds": "bonds",
    "indexFunds": "index_funds",
    "index_funds": "index_funds",
}


class Portfolio(LearningModel):
    """A learner's simulated portfolio within one league."""

    league_id: str
    total_value: Decimal
    liquid_funds: Decimal
    lesson_rewards: Decimal
    allocation: AssetAllocation = Field(default_factory=AssetAllocation)
    holdings: List[StockHolding] = Field(default_factory=list)
    history: List[PortfolioSnapshot] = Field(default_factory=list)

    @property
    def components_total(self) -> Decimal:
        """liquid funds + lesson rewards + holdings + allocation buckets."""
        return (
            self.liquid_funds
            + self.lesson_rewards
            + sum((h.total_value for h in self.holdings), ZERO)
            + self.allocation.total
        )

    def find_holding(self, symbol: str) -> Optional[StockHolding]:
        for holding in self.holdings:
            if holding.symbol == symbol:
                return holding
        return None
