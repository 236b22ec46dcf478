"""Per-league collection of learning portfolios."""

import random
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from ..config.logging import get_logger
from ..config.settings import get_settings
from ..data import load_seed_data
from ..exceptions import NotFoundError, ValidationException
from .history import calculate_volatility_factor, generate_portfolio_history
from .market import generate_market_baseline
from .models import AssetAllocation, Portfolio, PortfolioSnapshot, Stock, TimeFrame
from .timeframes import filter_data_by_time_frame
from .valuation import INCREMENT, Amount, allocate_funds, buy_stock, recompute_total_value

logger = get_logger(__name__)


class PortfolioBook:
    """Learning portfolios keyed by league, with a selected league and time frame."""

    def __init__(
        self,
        portfolios: Optional[Iterable[Portfolio]] = None,
        stocks: Optional[Iterable[Stock]] = None,
        mode: Optional[str] = None,
    ):
        self.logger = logger.bind(component="portfolio_book")
        self.settings = get_settings()
        self.mode = (mode or self.settings.total_value_mode).lower()
        self.portfolios: Dict[str, Portfolio] = {}
        self.stocks: List[Stock] = list(stocks or [])
        self.time_frame = TimeFrame.ONE_MONTH
        self.selected_league_id: Optional[str] = None

        for portfolio in portfolios or []:
            self._add(portfolio)

    @classmethod
    def from_seed(cls, data: Optional[Dict[str, Any]] = None, mode: Optional[str] = None) -> "PortfolioBook":
        data = data if data is not None else load_seed_data()
        return cls(
            portfolios=[Portfolio.model_validate(raw) for raw in data.get("learning_portfolios", [])],
            stocks=[Stock.model_validate(raw) for raw in data.get("stocks", [])],
            mode=mode,
        )

    def _add(self, portfolio: Portfolio) -> Portfolio:
        if self.mode != INCREMENT:
            recompute_total_value(portfolio)
        self.portfolios[portfolio.league_id] = portfolio
        if self.selected_league_id is None:
            self.selected_league_id = portfolio.league_id
        return portfolio

    def select_league(self, league_id: str) -> None:
        self.get_portfolio(league_id)
        self.selected_league_id = league_id

    def set_time_frame(self, time_frame) -> None:
        self.time_frame = TimeFrame(time_frame)

    def ensure_portfolio_exists(self, league_id: str) -> Portfolio:
        """
        Return the league's portfolio, creating a default one when missing.

        New portfolios start with the configured liquid funds and lesson
        rewards, an empty allocation and no holdings.
        """
        existing = self.portfolios.get(league_id)
        if existing is not None:
            return existing

        portfolio = Portfolio(
            league_id=league_id,
            total_value=Decimal(str(self.settings.default_starting_balance)),
            liquid_funds=Decimal(str(self.settings.default_liquid_funds)),
            lesson_rewards=Decimal(str(self.settings.default_lesson_rewards)),
            allocation=AssetAllocation(),
        )
        self.logger.info("Created learning portfolio", league_id=league_id)
        return self._add(portfolio)

    def has_portfolio(self, league_id: str) -> bool:
        return league_id in self.portfolios

    def get_portfolio_by_league(self, league_id: str) -> Optional[Portfolio]:
        return self.portfolios.get(league_id)

    def get_portfolio(self, league_id: str) -> Portfolio:
        portfolio = self.portfolios.get(league_id)
        if portfolio is None:
            raise NotFoundError("Portfolio", league_id)
        return portfolio

    def get_current_portfolio(self) -> Portfolio:
        if self.selected_league_id is None:
            raise ValidationException("No league is selected")
        return self.get_portfolio(self.selected_league_id)

    def allocate_funds(self, league_id: str, asset_class: str, amount: Amount) -> Portfolio:
        return allocate_funds(self.get_portfolio(league_id), asset_class, amount, mode=self.mode)

    def buy_stock(
        self,
        league_id: str,
        stock: Stock,
        shares: Amount,
        completed_lessons: Optional[Iterable[str]] = None,
    ) -> Portfolio:
        return buy_stock(
            self.get_portfolio(league_id),
            stock,
            shares,
            completed_lessons=completed_lessons,
            mode=self.mode,
        )

    def search_stocks(self, query: Optional[str] = None) -> List[Stock]:
        return [stock for stock in self.stocks if stock.matches(query)]

    def find_stock(self, symbol: str) -> Optional[Stock]:
        for stock in self.stocks:
            if stock.symbol.upper() == symbol.upper():
                return stock
        return None

    def history_for(
        self,
        league_id: str,
        starting_balance: float,
        league_start: datetime,
        now: Optional[datetime] = None,
    ) -> List[PortfolioSnapshot]:
        """
        Chart history for the league's portfolio, filtered to the selected
        time frame.

        The random source is seeded from the league id so the same league
        renders the same shape on every call with the same ``now``.
        """
        portfolio = self.get_portfolio(league_id)
        series = generate_portfolio_history(
            float(portfolio.total_value),
            starting_balance,
            league_start,
            calculate_volatility_factor(league_id, starting_balance),
            rng=random.Random(league_id),
            now=now,
        )
        portfolio.history = series
        return list(filter_data_by_time_frame(series, self.time_frame, now=now))

    def market_baseline(self, days: int = 30, now: Optional[datetime] = None) -> List[PortfolioSnapshot]:
        return generate_market_baseline(
            days,
            start_value=self.settings.default_starting_balance,
            rng=random.Random("market-baseline"),
            now=now,
        )
