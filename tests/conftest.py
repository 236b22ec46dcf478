"""Shared test configuration and fixtures."""

import sys
from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio

sys.path.append("src")

from flit.config.settings import get_settings
from flit.events import EventBus, set_event_bus
from flit.fantasy import FantasyStore, LeagueManager, LeagueSettings
from flit.mockapi import create_app
from flit.services import ApiClient


class FrozenClock:
    """Callable clock for managers that take ``clock=``."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def clean_settings_cache():
    """Clear cached settings between tests to avoid state pollution."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def event_bus():
    """Fresh event bus installed as the process-wide bus."""
    bus = EventBus("test")
    set_event_bus(bus)
    yield bus
    set_event_bus(None)


@pytest.fixture
def store():
    """Seeded store; every test gets its own copy."""
    return FantasyStore.from_seed()


@pytest.fixture
def clock():
    return FrozenClock(datetime(2025, 11, 10, 15, 0, tzinfo=timezone.utc))


@pytest.fixture
def league_manager(store, clock):
    return LeagueManager(store, clock=clock)


@pytest.fixture
def draft_league(store, league_manager):
    """Pre-draft league of user_1..user_4 (in that order), two picks each."""
    league = league_manager.create_league(
        "Draft Night",
        "user_1",
        LeagueSettings(
            league_size=4,
            portfolio_size=2,
            active_slots=1,
            bench_slots=1,
            enabled_asset_classes=["Stock", "ETF"],
        ),
    )
    for user_id in ("user_2", "user_3", "user_4"):
        league_manager.join_by_code(league.join_code, user_id)
    return league


@pytest.fixture
def app(store, event_bus):
    """Mock backend app over the test store and bus."""
    return create_app(store=store, event_bus=event_bus)


@pytest_asyncio.fixture
async def api_client(app):
    """ApiClient talking to the mock backend in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test/api") as http:
        yield ApiClient(client=http)
