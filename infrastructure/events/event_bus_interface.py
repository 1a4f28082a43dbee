from abc import ABC, abstractmethod
from typing import Callable

from django.utils import timezone


class EventBus(ABC):
    """Abstract event bus interface."""

    @abstractmethod
    def publish(self, event_type: str, payload: dict):
        """Publish event to bus."""
        pass

    @abstractmethod
    def subscribe(self, event_type: str, handler: Callable):
        """Subscribe to event type with handler function."""
        pass

    @staticmethod
    def envelope(event_type: str, payload: dict) -> dict:
        """Message shape every handler receives."""
        return {"event_type": event_type, "occurred_at": timezone.now().isoformat(), "payload": payload}
