"""
Flit - Main application entry point.

Serves the mock fantasy backend by default. With ``-watch <league_id>`` it
follows a league's draft through the configured backend instead.
"""

import asyncio
import sys

import uvicorn
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from flit.config.logging import get_logger, setup_logging
from flit.config.settings import get_settings
from flit.events import DraftCompletedEvent, get_event_bus
from flit.exceptions import FlitException
from flit.fantasy.models import DraftState
from flit.services import ApiClient, DraftService


def initialize_logging() -> None:
    settings = get_settings()
    setup_logging(
        level=settings.log_level,
        format_type=settings.log_format,
        file_enabled=settings.log_file_enabled,
        file_path=settings.log_file_path,
        max_file_size=settings.log_max_file_size,
        backup_count=settings.log_backup_count,
    )


def print_draft_state(state: DraftState) -> None:
    print(
        f"[{state.status.value}] round {state.current_round}, "
        f"pick {state.current_pick_number}, on the clock: {state.current_user_id or '-'} "
        f"({len(state.picks)} picks made)"
    )


async def watch_draft(league_id: str) -> None:
    """Follow a draft until it completes."""
    logger = get_logger(__name__)
    done = asyncio.Event()

    def on_completed(event: DraftCompletedEvent) -> None:
        if event.league_id == league_id:
            done.set()

    bus = get_event_bus()
    unsubscribe = bus.subscribe(DraftCompletedEvent, on_completed)

    async with ApiClient() as client:
        service = DraftService(client)
        try:
            async with service.watch(league_id, on_change=print_draft_state):
                await done.wait()
        finally:
            unsubscribe()

    logger.info("Draft finished", league_id=league_id)
    print("Draft complete.")


def main() -> None:
    """Main application entry point."""
    initialize_logging()

    logger = get_logger(__name__)
    logger.info("Starting Flit")

    settings = get_settings()

    if "-watch" in sys.argv:
        try:
            league_id = sys.argv[sys.argv.index("-watch") + 1]
        except IndexError:
            print("Error: Please provide a league id after the -watch flag.")
            sys.exit(1)

        logger.info("Watching draft", league_id=league_id, api=settings.api_base_url)
        try:
            asyncio.run(watch_draft(league_id))
        except KeyboardInterrupt:
            logger.info("Received interrupt signal")
            print("\nShutting down...")
        except FlitException as e:
            logger.error("Draft watch failed", error=e.message)
            print(f"Error: {e.message}")
            sys.exit(1)
        return

    logger.info(
        "Starting mock backend",
        host=settings.mock_api_host,
        port=settings.mock_api_port,
    )
    print("Starting Flit mock backend...")
    try:
        uvicorn.run(
            "flit.mockapi.app:create_app",
            factory=True,
            host=settings.mock_api_host,
            port=settings.mock_api_port,
            reload=settings.mock_api_reload,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
        print("\nShutting down...")


if __name__ == "__main__":
    main()
