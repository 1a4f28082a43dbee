import logging
from typing import Callable, Dict, List

from .event_bus_interface import EventBus


logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """Synchronous in-process bus: handlers run inside ``publish``.

    A failing handler is logged and skipped; it never breaks the publisher
    or the remaining handlers.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}

    def publish(self, event_type: str, payload: dict):
        message = self.envelope(event_type, payload)
        handlers = self._subscribers.get(event_type, [])
        logger.info(f"Published event: {event_type} ({len(handlers)} handlers)")

        for handler in handlers:
            try:
                handler(message)
            except Exception as e:
                logger.error(f"Handler error for {event_type}: {str(e)}", exc_info=True)

    def subscribe(self, event_type: str, handler: Callable):
        handlers = self._subscribers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.info(f"Registered handler for event: {event_type}")

    def clear(self):
        self._subscribers.clear()
