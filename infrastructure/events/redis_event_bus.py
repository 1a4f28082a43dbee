import json
import logging
import threading
from typing import Callable

import redis
from django.conf import settings

from .event_bus_interface import EventBus


logger = logging.getLogger(__name__)


class RedisEventBus(EventBus):
    """Redis pub/sub implementation of event bus.

    Lets a separate worker (notifications, analytics) consume order events
    without sharing a process with the API.
    """

    def __init__(self, redis_url: str = None):
        self.redis_url = redis_url or getattr(settings, "EVENT_BUS_REDIS_URL", "redis://localhost:6379/0")
        self.redis_client = redis.from_url(self.redis_url)
        self._subscribers = {}
        self._listening = False

    def publish(self, event_type: str, payload: dict):
        """Publish event to Redis channel."""
        try:
            message = self.envelope(event_type, payload)
            self.redis_client.publish(f"events.{event_type}", json.dumps(message))
            logger.info(f"Published event: {event_type}")
        except redis.RedisError as e:
            # Events are notifications; a broker outage must not fail the order that triggered them
            logger.error(f"Failed to publish event {event_type}: {str(e)}")

    def subscribe(self, event_type: str, handler: Callable):
        """Subscribe to event channel."""
        self._subscribers.setdefault(event_type, []).append(handler)
        logger.info(f"Registered handler for event: {event_type}")

    def start_listening(self):
        """Start listening to subscribed channels (background thread)."""
        if self._listening or not self._subscribers:
            return

        channels = [f"events.{et}" for et in self._subscribers.keys()]

        def listen():
            try:
                pubsub = self.redis_client.pubsub()
                pubsub.subscribe(*channels)
                logger.info(f"EventBus listening on: {channels}")

                for message in pubsub.listen():
                    if message["type"] == "message":
                        self._handle_message(message)
            except redis.RedisError as e:
                logger.error(f"EventBus listener crashed: {e}")
            finally:
                self._listening = False

        self._listening = True
        threading.Thread(target=listen, daemon=True).start()

    def _handle_message(self, message):
        """Handle incoming message from Redis."""
        try:
            data = json.loads(message["data"])
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to decode event message: {str(e)}")
            return

        for handler in self._subscribers.get(data.get("event_type"), []):
            try:
                handler(data)
            except Exception as e:
                logger.error(f"Handler error for {data.get('event_type')}: {str(e)}")
