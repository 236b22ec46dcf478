"""Fund allocation and stock purchases for learning portfolios."""

from decimal import Decimal
from typing import Iterable, Optional, Union

from ..config.logging import get_logger
from ..config.settings import get_settings
from ..exceptions import AssetLockedError, InsufficientFundsError, ValidationException
from .models import ASSET_CLASSES, ZERO, Portfolio, Stock, StockHolding

logger = get_logger(__name__)

Amount = Union[Decimal, int, float, str]

RECOMPUTE = "recompute"
INCREMENT = "increment"


def to_decimal(value: Amount) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _mode(mode: Optional[str]) -> str:
    return (mode or get_settings().total_value_mode).lower()


def recompute_total_value(portfolio: Portfolio) -> Portfolio:
    """Set ``total_value`` to the sum of the portfolio's components."""
    portfolio.total_value = portfolio.components_total
    return portfolio


def allocate_funds(
    portfolio: Portfolio,
    asset_class: str,
    amount: Amount,
    mode: Optional[str] = None,
) -> Portfolio:
    """
    Move ``amount`` of liquid funds into an allocation bucket.

    Args:
        portfolio: Portfolio to update in place
        asset_class: ``savings``, ``bonds`` or ``indexFunds``
        amount: Amount to move, ``0 < amount <= liquid_funds``
        mode: ``recompute`` keeps ``total_value`` equal to the components;
            ``increment`` adds ``amount`` to ``total_value``

    Raises:
        ValidationException: Unknown asset class
        InsufficientFundsError: Amount not positive or above liquid funds
    """
    field = ASSET_CLASSES.get(asset_class)
    if field is None:
        raise ValidationException(
            f"Unknown asset class '{asset_class}'",
            field_errors={"assetClass": "must be savings, bonds or indexFunds"},
        )

    amount = to_decimal(amount)
    if amount <= ZERO or amount > portfolio.liquid_funds:
        raise InsufficientFundsError(amount, portfolio.liquid_funds)

    portfolio.liquid_funds -= amount
    setattr(portfolio.allocation, field, getattr(portfolio.allocation, field) + amount)

    if _mode(mode) == INCREMENT:
        portfolio.total_value += amount
    else:
        recompute_total_value(portfolio)

    logger.info(
        "Funds allocated",
        league_id=portfolio.league_id,
        asset_class=field,
        amount=str(amount),
    )
    return portfolio


def buy_stock(
    portfolio: Portfolio,
    stock: Stock,
    shares: Amount,
    completed_lessons: Optional[Iterable[str]] = None,
    mode: Optional[str] = None,
) -> Portfolio:
    """
    Buy ``shares`` of ``stock`` with lesson rewards.

    Held symbols get a weighted-average cost; new holdings start at the
    current price with no change.

    Raises:
        ValidationException: ``shares`` is not positive
        AssetLockedError: The stock's required lessons are not all completed
        InsufficientFundsError: Cost exceeds lesson rewards
    """
    shares = to_decimal(shares)
    if shares <= ZERO:
        raise ValidationException(
            "Shares must be greater than zero", field_errors={"shares": "must be > 0"}
        )

    completed = set(completed_lessons or [])
    missing = [lesson for lesson in stock.required_lessons if lesson not in completed]
    if missing:
        raise AssetLockedError(stock.symbol, missing)

    price = stock.current_price
    cost = price * shares
    if cost > portfolio.lesson_rewards:
        raise InsufficientFundsError(cost, portfolio.lesson_rewards, balance="lessonRewards")

    holding = portfolio.find_holding(stock.symbol)
    if holding is not None:
        total_shares = holding.shares + shares
        basis = holding.total_cost + cost
        average = basis / total_shares
        holding.cost_basis = basis
        holding.shares = total_shares
        holding.average_price = average
        holding.current_price = price
        holding.total_value = price * total_shares
        holding.change_percent = float((price - average) / average * 100)
    else:
        portfolio.holdings.append(
            StockHolding(
                symbol=stock.symbol,
                name=stock.name,
                shares=shares,
                average_price=price,
                current_price=price,
                total_value=cost,
                change_percent=0.0,
                cost_basis=cost,
            )
        )

    portfolio.lesson_rewards -= cost
    if _mode(mode) == INCREMENT:
        portfolio.total_value += cost
    else:
        recompute_total_value(portfolio)

    logger.info(
        "Stock bought",
        league_id=portfolio.league_id,
        symbol=stock.symbol,
        shares=str(shares),
        cost=str(cost),
    )
    return portfolio
