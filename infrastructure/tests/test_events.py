"""
Event Bus Tests
================

Unit tests for the in-memory and Redis event bus implementations.
"""

import json
from unittest.mock import MagicMock, patch

import redis
from django.test import SimpleTestCase, override_settings

from infrastructure.events import InMemoryEventBus, get_event_bus, reset_event_bus
from infrastructure.events.redis_event_bus import RedisEventBus


class InMemoryEventBusTest(SimpleTestCase):
    def setUp(self):
        self.bus = InMemoryEventBus()

    def test_handlers_receive_envelope(self):
        received = []
        self.bus.subscribe("order.placed", received.append)

        self.bus.publish("order.placed", {"order_id": 7})

        self.assertEqual(len(received), 1)
        message = received[0]
        self.assertEqual(message["event_type"], "order.placed")
        self.assertEqual(message["payload"], {"order_id": 7})
        self.assertIn("occurred_at", message)

    def test_only_matching_handlers_run(self):
        placed = MagicMock()
        cancelled = MagicMock()
        self.bus.subscribe("order.placed", placed)
        self.bus.subscribe("order.cancelled", cancelled)

        self.bus.publish("order.cancelled", {"order_id": 7})

        placed.assert_not_called()
        cancelled.assert_called_once()

    def test_duplicate_subscription_is_ignored(self):
        handler = MagicMock()
        self.bus.subscribe("order.placed", handler)
        self.bus.subscribe("order.placed", handler)

        self.bus.publish("order.placed", {})

        handler.assert_called_once()

    def test_failing_handler_does_not_stop_others(self):
        broken = MagicMock(side_effect=RuntimeError("boom"))
        healthy = MagicMock()
        self.bus.subscribe("order.placed", broken)
        self.bus.subscribe("order.placed", healthy)

        self.bus.publish("order.placed", {"order_id": 1})

        healthy.assert_called_once()

    def test_publish_without_subscribers(self):
        self.bus.publish("order.placed", {"order_id": 1})

    def test_clear(self):
        handler = MagicMock()
        self.bus.subscribe("order.placed", handler)
        self.bus.clear()

        self.bus.publish("order.placed", {})

        handler.assert_not_called()


class EventBusFactoryTest(SimpleTestCase):
    def setUp(self):
        reset_event_bus()
        self.addCleanup(reset_event_bus)

    @override_settings(EVENT_BUS_BACKEND="memory")
    def test_memory_backend_singleton(self):
        bus = get_event_bus()

        self.assertIsInstance(bus, InMemoryEventBus)
        self.assertIs(bus, get_event_bus())

    @override_settings(EVENT_BUS_BACKEND="redis", EVENT_BUS_REDIS_URL="redis://cache:6379/2")
    @patch("infrastructure.events.redis_event_bus.redis.from_url")
    def test_redis_backend(self, mock_from_url):
        bus = get_event_bus()

        self.assertIsInstance(bus, RedisEventBus)
        mock_from_url.assert_called_once_with("redis://cache:6379/2")


@patch("infrastructure.events.redis_event_bus.redis.from_url")
class RedisEventBusTest(SimpleTestCase):
    def test_publish_sends_json_envelope(self, mock_from_url):
        client = mock_from_url.return_value
        bus = RedisEventBus("redis://localhost:6379/0")

        bus.publish("order.status_changed", {"order_id": 3, "to_status": "confirmed"})

        channel, raw = client.publish.call_args[0]
        self.assertEqual(channel, "events.order.status_changed")
        message = json.loads(raw)
        self.assertEqual(message["event_type"], "order.status_changed")
        self.assertEqual(message["payload"]["to_status"], "confirmed")

    def test_publish_swallows_broker_errors(self, mock_from_url):
        mock_from_url.return_value.publish.side_effect = redis.ConnectionError("down")
        bus = RedisEventBus("redis://localhost:6379/0")

        bus.publish("order.placed", {"order_id": 1})

    def test_handle_message_dispatches_by_event_type(self, mock_from_url):
        bus = RedisEventBus("redis://localhost:6379/0")
        handler = MagicMock()
        bus.subscribe("order.placed", handler)

        payload = {"event_type": "order.placed", "payload": {"order_id": 9}}
        bus._handle_message({"type": "message", "data": json.dumps(payload)})

        handler.assert_called_once_with(payload)

    def test_handle_message_ignores_garbage(self, mock_from_url):
        bus = RedisEventBus("redis://localhost:6379/0")
        handler = MagicMock()
        bus.subscribe("order.placed", handler)

        bus._handle_message({"type": "message", "data": "not json"})

        handler.assert_not_called()
