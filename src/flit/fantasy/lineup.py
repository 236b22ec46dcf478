"""Lineup management for fantasy portfolios."""

from typing import Sequence

from ..config.logging import get_logger
from ..exceptions import InvalidLineupError
from .models import LeagueSettings, Portfolio, SlotStatus

logger = get_logger(__name__)


def update_lineup(
    portfolio: Portfolio,
    active_slot_ids: Sequence[str],
    bench_slot_ids: Sequence[str],
    settings: LeagueSettings,
) -> Portfolio:
    """
    Set which slots are ACTIVE and which sit on the BENCH.

    The two id lists must partition the portfolio's slots exactly, and the
    active list may not exceed the league's ``active_slots``. The portfolio is
    left untouched when validation fails.

    Raises:
        InvalidLineupError: Lists overlap, miss or invent slots, or too many
            slots are active
    """
    active = list(active_slot_ids)
    bench = list(bench_slot_ids)
    slot_ids = {slot.id for slot in portfolio.slots}

    if len(set(active)) != len(active) or len(set(bench)) != len(bench):
        raise InvalidLineupError("A slot is listed more than once")
    if set(active) & set(bench):
        raise InvalidLineupError("A slot cannot be both active and benched")

    unknown = (set(active) | set(bench)) - slot_ids
    if unknown:
        raise InvalidLineupError(
            "Lineup references slots outside this portfolio",
            details={"unknown_slot_ids": sorted(unknown)},
        )
    missing = slot_ids - set(active) - set(bench)
    if missing:
        raise InvalidLineupError(
            "Every slot must be either active or benched",
            details={"missing_slot_ids": sorted(missing)},
        )
    if len(active) > settings.active_slots:
        raise InvalidLineupError(
            f"At most {settings.active_slots} slots can be active",
            details={"active_slots": settings.active_slots},
        )

    active_set = set(active)
    for slot in portfolio.slots:
        slot.status = SlotStatus.ACTIVE if slot.id in active_set else SlotStatus.BENCH

    logger.info(
        "Lineup updated",
        portfolio_id=portfolio.id,
        active=len(active),
        bench=len(bench),
    )
    return portfolio


def portfolio_total_value(portfolio: Portfolio) -> float:
    return portfolio.total_value


def weekly_return(portfolio: Portfolio) -> float:
    """Percent return of the ACTIVE slots against their purchase prices."""
    active = portfolio.active_slots
    cost = sum(slot.purchase_price * slot.shares for slot in active)
    if not cost:
        return 0.0
    value = sum(slot.current_value * slot.shares for slot in active)
    return (value - cost) / cost * 100
