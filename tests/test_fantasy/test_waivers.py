"""Tests for the waiver wire."""

import sys

import pytest

sys.path.append("src")

from flit.exceptions import AssetLockedError, AssetUnavailableError, ValidationException
from flit.fantasy import SlotStatus, WaiverPriority, WaiverStatus, WaiverWire


@pytest.fixture
def wire(store, clock):
    return WaiverWire(store, clock=clock)


class TestAvailableAssets:
    def test_only_unowned_eligible_assets(self, wire):
        # league_1 allows Stock and ETF at $1+, and members hold 1, 2, 3, 9, 10 and 13
        tickers = {asset.ticker for asset in wire.available_assets("league_1")}

        assert tickers == {"NVDA", "TSLA", "QQQ"}

    def test_lock_view_and_search(self, wire):
        assets = {a.ticker: a for a in wire.available_assets("league_1", user_id="user_1")}

        assert assets["QQQ"].is_locked is False
        assert assets["TSLA"].is_locked is True
        assert [a.ticker for a in wire.available_assets("league_1", query="tesla")] == ["TSLA"]


class TestSubmitClaim:
    def test_reverse_standings_priority(self, store, wire):
        league = store.get_league("league_1")

        # user_4 holds nothing, user_1 holds the most
        assert wire.priority_for(league, "user_4") == 1
        assert wire.priority_for(league, "user_2") == 2
        assert wire.priority_for(league, "user_3") == 3
        assert wire.priority_for(league, "user_1") == 4

    def test_rolling_priority_uses_waiver_order(self, store, wire):
        league = store.get_league("league_1")
        league.settings.waiver_priority = WaiverPriority.ROLLING

        assert wire.priority_for(league, "user_3") == 3

    def test_submit_claim(self, wire, clock):
        claim = wire.submit_claim("league_1", "user_1", "11")

        assert claim.status == WaiverStatus.PENDING
        assert claim.priority == 4
        assert claim.created_at == clock.now
        assert wire.list_claims("league_1", "user_1") == [claim]

    def test_owned_asset_cannot_be_claimed(self, wire):
        with pytest.raises(AssetUnavailableError):
            wire.submit_claim("league_1", "user_1", "10")

    def test_locked_asset_cannot_be_claimed(self, wire):
        with pytest.raises(AssetLockedError):
            wire.submit_claim("league_1", "user_2", "11")

    def test_drop_asset_must_be_owned(self, wire):
        with pytest.raises(ValidationException):
            wire.submit_claim("league_1", "user_1", "11", drop_asset_id="10")

    def test_non_member_is_rejected(self, wire):
        with pytest.raises(ValidationException):
            wire.submit_claim("league_1", "user_9", "11")


class TestProcessClaims:
    def test_higher_priority_wins(self, store, wire):
        store.get_user("user_4").complete_lesson("lesson_basics")
        late = wire.submit_claim("league_1", "user_1", "11")
        early = wire.submit_claim("league_1", "user_4", "11")

        processed = wire.process_claims("league_1")

        assert [c.id for c in processed] == [early.id, late.id]
        assert early.status == WaiverStatus.PROCESSED
        assert late.status == WaiverStatus.FAILED
        assert late.failure_reason == "Asset is no longer available"

        slot = store.get_league_portfolio("league_1", "user_4").find_slot_by_asset("11")
        assert slot.status == SlotStatus.BENCH

    def test_full_portfolio_needs_a_drop(self, store, wire):
        store.get_league("league_1").settings.portfolio_size = 4
        claim = wire.submit_claim("league_1", "user_1", "11")

        wire.process_claims("league_1")

        assert claim.status == WaiverStatus.FAILED
        assert claim.failure_reason == "Portfolio is full"

    def test_drop_frees_a_slot(self, store, wire):
        store.get_league("league_1").settings.portfolio_size = 4
        claim = wire.submit_claim("league_1", "user_1", "11", drop_asset_id="9")

        wire.process_claims("league_1")

        portfolio = store.get_league_portfolio("league_1", "user_1")
        assert claim.status == WaiverStatus.PROCESSED
        assert "9" not in portfolio.asset_ids
        assert "11" in portfolio.asset_ids

    def test_rolling_claimant_moves_to_back(self, store, wire):
        league = store.get_league("league_1")
        league.settings.waiver_priority = WaiverPriority.ROLLING
        wire.submit_claim("league_1", "user_1", "11")

        wire.process_claims("league_1")

        assert league.waiver_order == ["user_2", "user_3", "user_4", "user_1"]

    def test_processed_claims_are_not_rerun(self, wire):
        wire.submit_claim("league_1", "user_1", "11")
        wire.process_claims("league_1")

        assert wire.process_claims("league_1") == []
