"""In-process event bus used as the push channel for league and draft updates."""

import asyncio
import inspect
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Type

from ..config.logging import get_logger
from ..fantasy.models import utcnow
from .events import DomainEvent

logger = get_logger(__name__)

Handler = Callable[[DomainEvent], Any]


class EventBus:
    """Publish/subscribe channel for domain events.

    Handlers run on the publishing event loop. Sync handlers are called
    inline; async handlers are scheduled as tasks and optionally awaited.
    """

    def __init__(self, name: str = "default"):
        self.name = name
        self.logger = logger.bind(event_bus=name)

        self._handlers: Dict[Type[DomainEvent], List[Handler]] = defaultdict(list)

        self._event_history: List[Dict[str, Any]] = []
        self._max_history_size = 500

        self._stats = {
            "events_published": 0,
            "handlers_executed": 0,
            "errors_count": 0,
            "last_event_time": None,
        }

    def subscribe(
        self, event_type: Type[DomainEvent], handler: Handler
    ) -> Callable[[], bool]:
        """
        Subscribe a handler to an event type.

        Args:
            event_type: Type of event to subscribe to
            handler: Handler function (sync or async)

        Returns:
            Callable that removes the subscription; calling it twice is a no-op
        """
        self._handlers[event_type].append(handler)

        self.logger.debug(
            "Event handler subscribed",
            event_type=event_type.__name__,
            handler=getattr(handler, "__name__", repr(handler)),
            total_handlers=len(self._handlers[event_type]),
        )
        return lambda: self.unsubscribe(event_type, handler)

    def unsubscribe(self, event_type: Type[DomainEvent], handler: Handler) -> bool:
        """
        Unsubscribe a handler from an event type.

        Returns:
            True if handler was found and removed
        """
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)
            self.logger.debug(
                "Event handler unsubscribed",
                event_type=event_type.__name__,
                remaining_handlers=len(handlers),
            )
            return True
        return False

    async def publish(
        self, event: DomainEvent, wait_for_handlers: bool = True
    ) -> Dict[str, Any]:
        """
        Publish an event to all subscribed handlers.

        Args:
            event: Domain event to publish
            wait_for_handlers: Whether to await async handlers before returning

        Returns:
            Dictionary with publication results
        """
        event_type = type(event)
        self._stats["events_published"] += 1
        self._stats["last_event_time"] = utcnow()
        self._add_to_history(event)

        handlers = list(self._handlers.get(event_type, []))
        successful = 0
        failed = 0
        tasks = []

        for handler in handlers:
            try:
                if inspect.iscoroutinefunction(handler):
                    tasks.append(asyncio.create_task(handler(event)))
                else:
                    handler(event)
                    successful += 1
            except Exception as e:
                failed += 1
                self._stats["errors_count"] += 1
                self.logger.error(
                    "Event handler failed",
                    event_type=event_type.__name__,
                    handler=getattr(handler, "__name__", repr(handler)),
                    error=str(e),
                    exc_info=True,
                )

        if tasks and wait_for_handlers:
            for result in await asyncio.gather(*tasks, return_exceptions=True):
                if isinstance(result, Exception):
                    failed += 1
                    self._stats["errors_count"] += 1
                    self.logger.error(
                        "Async event handler failed",
                        event_type=event_type.__name__,
                        error=str(result),
                    )
                else:
                    successful += 1
        elif tasks:
            successful += len(tasks)

        self._stats["handlers_executed"] += len(handlers)

        self.logger.debug(
            "Event published",
            event_type=event_type.__name__,
            event_id=event.event_id,
            handlers=len(handlers),
            failed_handlers=failed,
        )
        return {
            "event_id": event.event_id,
            "handlers_executed": len(handlers),
            "successful_handlers": successful,
            "failed_handlers": failed,
        }

    def _add_to_history(self, event: DomainEvent) -> None:
        self._event_history.append(event.to_dict())
        if len(self._event_history) > self._max_history_size:
            self._event_history = self._event_history[-self._max_history_size :]

    def get_statistics(self) -> Dict[str, Any]:
        """Get event bus statistics."""
        return {
            **self._stats,
            "registered_event_types": len(self._handlers),
            "total_handlers": sum(len(h) for h in self._handlers.values()),
            "history_size": len(self._event_history),
        }

    def get_event_history(self, limit: int = 100) -> List[Dict[str, Any]]:
        return self._event_history[-limit:]

    def clear_history(self) -> None:
        self._event_history.clear()


_global_event_bus: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """Get or create the process-wide event bus."""
    global _global_event_bus

    if _global_event_bus is None:
        _global_event_bus = EventBus("global")

    return _global_event_bus


def set_event_bus(event_bus: Optional[EventBus]) -> None:
    global _global_event_bus
    _global_event_bus = event_bus
