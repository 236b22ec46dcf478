"""Tests for league creation, membership and lifecycle."""

import string
import sys

import pytest

sys.path.append("src")

from flit.exceptions import (
    InvalidJoinCodeError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    ValidationException,
)
from flit.fantasy import DraftScheduler, DraftStatus, LeagueStatus, User


@pytest.fixture
def newcomer(store):
    return store.add_user(User(id="user_5", username="@newbie", name="Nia Newbie"))


class TestCreateLeague:
    def test_create_league_defaults(self, store, league_manager, clock):
        league = league_manager.create_league("  Rookie Cup ", "user_3")

        assert league.name == "Rookie Cup"
        assert league.admin_user_id == "user_3"
        assert league.member_ids == ["user_3"]
        assert league.status == LeagueStatus.PRE_DRAFT
        assert league.current_week == 0
        assert league.created_at == clock.now
        assert store.get_draft_state(league.id).status == DraftStatus.PENDING

    def test_join_code_format(self, league_manager):
        league = league_manager.create_league("Rookie Cup", "user_3")

        assert len(league.join_code) == 6
        assert set(league.join_code) <= set(string.ascii_uppercase + string.digits)

    def test_blank_name_is_rejected(self, league_manager):
        with pytest.raises(ValidationException):
            league_manager.create_league("   ", "user_1")

    def test_unknown_admin_is_rejected(self, league_manager):
        with pytest.raises(NotFoundError):
            league_manager.create_league("Ghost League", "user_404")


class TestJoinLeague:
    def test_join_by_code(self, league_manager, clock, newcomer):
        league = league_manager.create_league("Rookie Cup", "user_3")

        result = league_manager.join_by_code(league.join_code.lower(), newcomer.id)

        assert result.league.id == league.id
        assert result.membership.user_id == "user_5"
        assert result.membership.joined_at == clock.now
        assert league.member_ids == ["user_3", "user_5"]
        assert league.waiver_order == ["user_3", "user_5"]

    @pytest.mark.parametrize("code", ["", "ABCDE", "ABCDEFG"])
    def test_malformed_code_is_rejected(self, league_manager, code):
        with pytest.raises(InvalidJoinCodeError):
            league_manager.join_by_code(code, "user_1")

    def test_unknown_code_is_not_found(self, league_manager):
        with pytest.raises(NotFoundError):
            league_manager.join_by_code("ZZZZZZ", "user_1")

    def test_started_league_cannot_be_joined(self, league_manager, newcomer):
        with pytest.raises(InvalidStateError):
            league_manager.join_by_code("DIAMND", newcomer.id)

    def test_member_cannot_join_twice(self, league_manager):
        with pytest.raises(ValidationException, match="already a member"):
            league_manager.join_by_code("REIT42", "user_1")

    def test_full_league_is_rejected(self, store, league_manager, newcomer):
        with pytest.raises(ValidationException, match="full"):
            league_manager.join_by_code("REIT42", newcomer.id)

        assert len(store.get_league("league_2").members) == 4


class TestLeaveLeague:
    def test_admin_leaving_passes_admin_on(self, store, league_manager):
        result = league_manager.leave_league("league_1", "user_2")

        league = store.get_league("league_1")
        assert result.league_deleted is False
        assert result.message == "You have successfully left the league."
        assert "user_2" not in league.member_ids
        assert league.admin_user_id == "user_1"
        assert store.find_portfolio("league_1", "user_2") is None

    def test_last_member_leaving_deletes_league(self, store, league_manager):
        league = league_manager.create_league("Solo", "user_4")

        result = league_manager.leave_league(league.id, "user_4")

        assert result.league_deleted is True
        assert "deleted" in result.message
        assert store.find_league(league.id) is None
        assert league.id not in store.draft_states

    def test_cannot_leave_during_draft(self, store, league_manager, draft_league):
        scheduler = DraftScheduler(store)
        scheduler.start_draft(draft_league.id)
        for user_id, asset_id in (("user_1", "1"), ("user_2", "3"), ("user_3", "9")):
            scheduler.make_pick(draft_league.id, user_id, asset_id)

        with pytest.raises(InvalidStateError, match="draft is running"):
            league_manager.leave_league(draft_league.id, "user_4")

        state = store.get_draft_state(draft_league.id)
        assert draft_league.member_ids == ["user_1", "user_2", "user_3", "user_4"]
        assert state.current_user_id == "user_4"
        assert state.status == DraftStatus.ACTIVE

    def test_non_member_cannot_leave(self, league_manager, newcomer):
        with pytest.raises(NotFoundError):
            league_manager.leave_league("league_1", newcomer.id)


class TestCompetitionAndSettings:
    def test_start_competition(self, store, league_manager, clock):
        league = league_manager.start_competition("league_2", "user_1")

        assert league.status == LeagueStatus.ACTIVE
        assert league.current_week == 1
        assert league.settings.start_date == clock.now
        portfolios = store.portfolios_for_league("league_2")
        assert len(portfolios) == 4
        assert {p.cash_balance for p in portfolios} == {10000.0}

    def test_only_admin_can_start(self, league_manager):
        with pytest.raises(PermissionDeniedError):
            league_manager.start_competition("league_2", "user_2")

    def test_started_league_cannot_start_again(self, league_manager):
        with pytest.raises(InvalidStateError):
            league_manager.start_competition("league_1", "user_2")

    def test_update_settings_before_start(self, store, league_manager):
        league = store.get_league("league_2")
        new_settings = league.settings.model_copy(update={"season_length": 12})

        updated = league_manager.update_settings("league_2", "user_1", new_settings)

        assert updated.settings.season_length == 12

    def test_settings_frozen_after_start(self, store, league_manager):
        settings = store.get_league("league_1").settings.model_copy()

        with pytest.raises(InvalidStateError):
            league_manager.update_settings("league_1", "user_2", settings)

    def test_only_admin_can_update_settings(self, store, league_manager):
        settings = store.get_league("league_2").settings.model_copy()

        with pytest.raises(PermissionDeniedError):
            league_manager.update_settings("league_2", "user_3", settings)


class TestLessonsAndListing:
    def test_lesson_completion_is_append_only(self, league_manager):
        league_manager.complete_lesson("user_2", "lesson_risk")
        user = league_manager.complete_lesson("user_2", "lesson_risk")

        assert user.completed_lessons == ["lesson_risk"]

    def test_asset_view_reflects_lessons(self, store, league_manager):
        nvda = store.get_asset("4")

        assert league_manager.asset_view_for(nvda, "user_1").is_locked is True
        league_manager.complete_lesson("user_1", "lesson_risk")
        assert league_manager.asset_view_for(nvda, "user_1").is_locked is False
        assert nvda.is_locked is False

    def test_list_leagues_for_user(self, league_manager, newcomer):
        assert len(league_manager.list_leagues()) == 2
        assert league_manager.list_leagues(newcomer.id) == []
        assert {league.id for league in league_manager.list_leagues("user_1")} == {"league_1", "league_2"}
