"""Tests for the draft watcher."""

import asyncio
import sys
from unittest.mock import AsyncMock, Mock

import pytest

sys.path.append("src")

from flit.events import DraftCompletedEvent, DraftStateChangedEvent
from flit.exceptions import NetworkError
from flit.fantasy import DraftState, DraftStatus
from flit.fantasy.polling import DraftWatcher


def draft_state(status=DraftStatus.ACTIVE, user_id="user_1", pick_number=1):
    return DraftState(
        league_id="league_1",
        status=status,
        current_pick_number=pick_number,
        current_user_id=user_id,
    )


def published(bus, event_type):
    return [e for e in bus.get_event_history() if e["event_type"] == event_type.__name__]


class TestPollOnce:
    @pytest.mark.asyncio
    async def test_first_state_is_published(self, event_bus):
        on_change = Mock()
        fetch = AsyncMock(return_value=draft_state())
        watcher = DraftWatcher("league_1", fetch, event_bus=event_bus, on_change=on_change)

        state = await watcher.poll_once()

        assert state.current_user_id == "user_1"
        on_change.assert_called_once_with(state)
        (event,) = published(event_bus, DraftStateChangedEvent)
        assert event["current_user_id"] == "user_1"
        assert event["status"] == "active"

    @pytest.mark.asyncio
    async def test_unchanged_state_is_not_republished(self, event_bus):
        on_change = Mock()
        fetch = AsyncMock(side_effect=[draft_state(), draft_state(), draft_state(user_id="user_2", pick_number=2)])
        watcher = DraftWatcher("league_1", fetch, event_bus=event_bus, on_change=on_change)

        for _ in range(3):
            await watcher.poll_once()

        assert on_change.call_count == 2
        assert len(published(event_bus, DraftStateChangedEvent)) == 2

    @pytest.mark.asyncio
    async def test_completion_is_published_once(self, event_bus):
        completed = draft_state(status=DraftStatus.COMPLETED, user_id="user_4")
        fetch = AsyncMock(side_effect=[draft_state(), completed, completed.model_copy(update={"remaining_time_seconds": 0})])
        watcher = DraftWatcher("league_1", fetch, event_bus=event_bus)

        for _ in range(3):
            await watcher.poll_once()

        assert len(published(event_bus, DraftCompletedEvent)) == 1

    @pytest.mark.asyncio
    async def test_fetch_errors_are_logged_not_raised(self, event_bus):
        fetch = AsyncMock(side_effect=NetworkError("Network error - please check your connection"))
        watcher = DraftWatcher("league_1", fetch, event_bus=event_bus)

        assert await watcher.poll_once() is None
        assert event_bus.get_event_history() == []

    @pytest.mark.asyncio
    async def test_missing_draft_is_ignored(self, event_bus):
        watcher = DraftWatcher("league_1", AsyncMock(return_value=None), event_bus=event_bus)

        assert await watcher.poll_once() is None
        assert watcher.last_state is None


class TestWatcherLifecycle:
    def test_interval_defaults_to_settings(self, event_bus):
        watcher = DraftWatcher("league_1", AsyncMock(), event_bus=event_bus)

        assert watcher.interval_seconds == 3
        assert watcher.running is False

    @pytest.mark.asyncio
    async def test_start_polls_and_stop_is_idempotent(self, event_bus):
        fetch = AsyncMock(return_value=draft_state())
        watcher = DraftWatcher("league_1", fetch, event_bus=event_bus, interval_seconds=60)

        watcher.start()
        assert watcher.running is True
        for _ in range(100):
            if fetch.await_count:
                break
            await asyncio.sleep(0.02)

        watcher.stop()
        watcher.stop()

        assert fetch.await_count >= 1
        assert watcher.running is False

    @pytest.mark.asyncio
    async def test_context_manager_releases_scheduler(self, event_bus):
        watcher = DraftWatcher("league_1", AsyncMock(return_value=None), event_bus=event_bus)

        async with watcher:
            assert watcher.running is True

        assert watcher.running is False
