from unittest.mock import MagicMock

from django.test import SimpleTestCase

from infrastructure.events import InMemoryEventBus
from marketplace.domain.events import OrderCancelledEvent, OrderPlacedEvent
from marketplace.infra.events.listeners import (
    handle_order_cancelled,
    handle_order_placed,
    handle_order_status_changed,
    register_marketplace_listeners,
)


class ListenerTests(SimpleTestCase):
    def test_register_subscribes_order_events(self):
        bus = MagicMock()

        register_marketplace_listeners(bus)

        subscribed = {call[0][0]: call[0][1] for call in bus.subscribe.call_args_list}
        self.assertEqual(subscribed["order.placed"], handle_order_placed)
        self.assertEqual(subscribed["order.status_changed"], handle_order_status_changed)
        self.assertEqual(subscribed["order.cancelled"], handle_order_cancelled)

    def test_handle_order_placed_logs(self):
        event = OrderPlacedEvent(
            order_id=1, order_number="NLR123", user_id=2, vendor_id=3, order_type="product", total_amount=437
        )
        with self.assertLogs("marketplace.infra.events.listeners", level="INFO") as logs:
            handle_order_placed(InMemoryEventBus.envelope("order.placed", event.payload))

        self.assertIn("NLR123", logs.output[0])

    def test_handle_order_cancelled_logs_released_units(self):
        event = OrderCancelledEvent(order_id=1, order_number="NLR9", user_id=2, from_status="pending", released_units=4)
        with self.assertLogs("marketplace.infra.events.listeners", level="INFO") as logs:
            handle_order_cancelled({"payload": event.payload})

        self.assertIn("4 units returned to stock", logs.output[0])

    def test_handlers_tolerate_missing_payload(self):
        with self.assertLogs("marketplace.infra.events.listeners", level="INFO"):
            handle_order_status_changed({})

    def test_listeners_run_through_bus(self):
        bus = InMemoryEventBus()
        register_marketplace_listeners(bus)

        with self.assertLogs("marketplace.infra.events.listeners", level="INFO") as logs:
            bus.publish(
                "order.status_changed", {"order_number": "NLR5", "from_status": "pending", "to_status": "confirmed"}
            )

        self.assertIn("pending -> confirmed", logs.output[0])
