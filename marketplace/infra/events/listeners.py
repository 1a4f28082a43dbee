import logging

from infrastructure.events import get_event_bus


logger = logging.getLogger(__name__)


def handle_order_placed(event_data):
    """Handle order.placed event."""
    payload = event_data.get("payload", {})
    logger.info(
        f"[Marketplace Listener] Order placed: {payload.get('order_number')} "
        f"(vendor={payload.get('vendor_id')}, total={payload.get('total_amount')})"
    )


def handle_order_status_changed(event_data):
    """Handle order.status_changed event."""
    payload = event_data.get("payload", {})
    logger.info(
        f"[Marketplace Listener] Order {payload.get('order_number')} moved "
        f"{payload.get('from_status')} -> {payload.get('to_status')}"
    )


def handle_order_cancelled(event_data):
    """Handle order.cancelled event."""
    payload = event_data.get("payload", {})
    logger.info(
        f"[Marketplace Listener] Order {payload.get('order_number')} cancelled, "
        f"{payload.get('released_units', 0)} units returned to stock"
    )


def register_marketplace_listeners(event_bus=None):
    """Register all marketplace event listeners."""
    event_bus = event_bus or get_event_bus()
    event_bus.subscribe("order.placed", handle_order_placed)
    event_bus.subscribe("order.status_changed", handle_order_status_changed)
    event_bus.subscribe("order.cancelled", handle_order_cancelled)
    logger.info("Marketplace event listeners registered")
