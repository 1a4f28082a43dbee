import logging

from django.conf import settings

from .event_bus_interface import EventBus
from .memory_event_bus import InMemoryEventBus


logger = logging.getLogger(__name__)

# Singleton instance
_event_bus_instance = None


def get_event_bus() -> EventBus:
    """Get singleton event bus instance for the configured ``EVENT_BUS_BACKEND``."""
    global _event_bus_instance
    if _event_bus_instance is None:
        backend = getattr(settings, "EVENT_BUS_BACKEND", "memory")
        if backend == "redis":
            from .redis_event_bus import RedisEventBus

            _event_bus_instance = RedisEventBus()
        else:
            _event_bus_instance = InMemoryEventBus()
        logger.debug(f"Created event bus: {type(_event_bus_instance).__name__}")
    return _event_bus_instance


def reset_event_bus():
    """Drop the singleton (tests and settings overrides)."""
    global _event_bus_instance
    _event_bus_instance = None


__all__ = ["EventBus", "InMemoryEventBus", "get_event_bus", "reset_event_bus"]
