"""Draft watcher: a scoped polling resource that pushes draft updates."""

from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from ..config.logging import get_logger
from ..config.settings import get_settings
from ..events import (
    DraftCompletedEvent,
    DraftStateChangedEvent,
    EventBus,
    get_event_bus,
)
from ..exceptions import FlitException
from .models import DraftState, DraftStatus

logger = get_logger(__name__)

FetchDraftState = Callable[[], Awaitable[Optional[DraftState]]]


class DraftWatcher:
    """Polls a league's draft state and publishes changes on the event bus.

    Use as an async context manager: the interval job is acquired on enter
    and released on exit. ``stop()`` may be called any number of times.

    Example:
        async with DraftWatcher("league_1", fetch) as watcher:
            ...
    """

    JOB_ID = "draft_watch"

    def __init__(
        self,
        league_id: str,
        fetch_state: FetchDraftState,
        event_bus: Optional[EventBus] = None,
        interval_seconds: Optional[int] = None,
        on_change: Optional[Callable[[DraftState], None]] = None,
    ):
        self.logger = logger.bind(component="draft_watcher", league_id=league_id)
        self.league_id = league_id
        self.fetch_state = fetch_state
        self.event_bus = event_bus or get_event_bus()
        self.interval_seconds = (
            interval_seconds or get_settings().draft_poll_interval_seconds
        )
        self.on_change = on_change

        self.last_state: Optional[DraftState] = None
        self._scheduler: Optional[AsyncIOScheduler] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None

    def start(self) -> None:
        """Start polling; must be called with a running event loop."""
        if self._scheduler is not None:
            return

        scheduler = AsyncIOScheduler(
            job_defaults={"coalesce": True, "max_instances": 1},
            timezone="UTC",
        )
        scheduler.add_job(
            self.poll_once,
            trigger="interval",
            seconds=self.interval_seconds,
            id=f"{self.JOB_ID}:{self.league_id}",
            next_run_time=datetime.now(timezone.utc),
        )
        scheduler.start()
        self._scheduler = scheduler

        self.logger.info("Draft watcher started", interval_seconds=self.interval_seconds)

    def stop(self) -> None:
        """Stop polling. Safe to call when already stopped."""
        scheduler, self._scheduler = self._scheduler, None
        if scheduler is None:
            return
        if scheduler.running:
            scheduler.shutdown(wait=False)
        self.logger.info("Draft watcher stopped")

    async def __aenter__(self) -> "DraftWatcher":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.stop()

    async def poll_once(self) -> Optional[DraftState]:
        """
        Fetch the draft state once and publish it when it changed.

        Returns:
            The fetched state, or None when nothing was fetched
        """
        try:
            state = await self.fetch_state()
        except FlitException as e:
            self.logger.warning("Draft poll failed", error=e.message)
            return None

        if state is None:
            return None

        previous, self.last_state = self.last_state, state
        if previous is not None and previous.model_dump() == state.model_dump():
            return state

        await self.event_bus.publish(
            DraftStateChangedEvent(
                league_id=self.league_id,
                status=state.status.value,
                current_round=state.current_round,
                current_pick_number=state.current_pick_number,
                current_user_id=state.current_user_id,
                pick_count=len(state.picks),
            )
        )
        if self.on_change is not None:
            self.on_change(state)

        if state.status == DraftStatus.COMPLETED and (
            previous is None or previous.status != DraftStatus.COMPLETED
        ):
            await self.event_bus.publish(
                DraftCompletedEvent(league_id=self.league_id, total_picks=len(state.picks))
            )
        return state
