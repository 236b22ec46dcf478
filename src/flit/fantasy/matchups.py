"""Weekly head-to-head scheduling and scoring."""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..config.logging import get_logger
from .models import League, Matchup, Portfolio, ScoringMethod, User
from .store import FantasyStore, new_id

logger = get_logger(__name__)


def score_portfolio(portfolio: Optional[Portfolio], scoring_method: ScoringMethod) -> float:
    """
    Score a portfolio's ACTIVE slots.

    ``Total Return %`` is the mean gain/loss percent of the active slots and
    ``Absolute Gain $`` the summed dollar gain. Benched slots never score.
    """
    if portfolio is None:
        return 0.0
    active = portfolio.active_slots
    if not active:
        return 0.0

    if scoring_method == ScoringMethod.ABSOLUTE_GAIN:
        score = sum(
            (slot.current_value - slot.purchase_price) * slot.shares for slot in active
        )
    else:
        score = sum(slot.gain_loss_percent for slot in active) / len(active)
    return round(score, 2)


def schedule_week(member_ids: Sequence[str], week: int) -> List[Tuple[str, Optional[str]]]:
    """
    Circle-method round-robin pairings for ``week`` (1-based).

    With an odd member count one member per week is paired with ``None``
    (a bye). The schedule repeats after ``n - 1`` weeks.
    """
    members: List[Optional[str]] = list(member_ids)
    if len(members) < 2:
        return []
    if len(members) % 2:
        members.append(None)

    n = len(members)
    shift = (week - 1) % (n - 1)
    rotating = members[1:]
    rotating = rotating[-shift:] + rotating[:-shift] if shift else rotating
    circle = [members[0]] + rotating

    pairs = []
    for i in range(n // 2):
        home, away = circle[i], circle[n - 1 - i]
        if home is None:
            home, away = away, None
        pairs.append((home, away))
    return pairs


def _winner(a_id: str, a_score: float, b_id: str, b_score: float) -> Optional[str]:
    if a_score > b_score:
        return a_id
    if b_score > a_score:
        return b_id
    return None


def build_matchups(
    league: League, portfolios: Iterable[Portfolio], week: int
) -> List[Matchup]:
    """Score every pairing of ``week``; byes produce no matchup."""
    by_user: Dict[str, Portfolio] = {p.user_id: p for p in portfolios}
    members: Dict[str, User] = {m.id: m for m in league.members}
    method = league.settings.scoring_method

    matchups = []
    for a_id, b_id in schedule_week(league.member_ids, week):
        if b_id is None:
            continue
        a_portfolio, b_portfolio = by_user.get(a_id), by_user.get(b_id)
        score_a = score_portfolio(a_portfolio, method)
        score_b = score_portfolio(b_portfolio, method)
        matchups.append(
            Matchup(
                id=new_id("matchup"),
                league_id=league.id,
                week=week,
                user_a_id=a_id,
                user_b_id=b_id,
                score_a=score_a,
                score_b=score_b,
                winner_id=_winner(a_id, score_a, b_id, score_b),
                user_a_portfolio_name=a_portfolio.name if a_portfolio else "",
                user_b_portfolio_name=b_portfolio.name if b_portfolio else "",
                user_a_avatar=members[a_id].avatar,
                user_b_avatar=members[b_id].avatar,
            )
        )
    return matchups


class MatchupBoard:
    """Looks up and lazily builds a league's weekly matchups."""

    def __init__(self, store: FantasyStore):
        self.logger = logger.bind(component="matchup_board")
        self.store = store

    def week_matchups(self, league_id: str, week: int) -> List[Matchup]:
        league = self.store.get_league(league_id)
        existing = self.store.matchups_for_week(league_id, week)
        if existing or week < 1:
            return existing

        built = build_matchups(league, self.store.portfolios_for_league(league_id), week)
        for matchup in built:
            self.store.save_matchup(matchup)
        self.logger.info(
            "Built weekly matchups", league_id=league_id, week=week, count=len(built)
        )
        return built

    def matchup_for_week(self, league_id: str, week: int, user_id: str) -> Optional[Matchup]:
        for matchup in self.week_matchups(league_id, week):
            if matchup.involves(user_id):
                return matchup
        return None

    def current_matchup(self, league_id: str, user_id: str) -> Optional[Matchup]:
        league = self.store.get_league(league_id)
        return self.matchup_for_week(league_id, league.current_week, user_id)
