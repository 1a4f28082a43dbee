from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .base import DomainEvent


@dataclass
class OrderPlacedEvent(DomainEvent):
    """Event: Order placed."""

    def __init__(
        self,
        order_id: int,
        order_number: str,
        user_id: int,
        vendor_id: Optional[int],
        order_type: str,
        total_amount: Decimal,
    ):
        super().__init__(
            event_type="order.placed",
            payload={
                "order_id": order_id,
                "order_number": order_number,
                "user_id": user_id,
                "vendor_id": vendor_id,
                "order_type": order_type,
                "total_amount": str(total_amount),
            },
        )


@dataclass
class OrderStatusChangedEvent(DomainEvent):
    """Event: Order moved along its status workflow."""

    def __init__(self, order_id: int, order_number: str, from_status: str, to_status: str, changed_by: int):
        super().__init__(
            event_type="order.status_changed",
            payload={
                "order_id": order_id,
                "order_number": order_number,
                "from_status": from_status,
                "to_status": to_status,
                "changed_by": changed_by,
            },
        )


@dataclass
class OrderCancelledEvent(DomainEvent):
    """Event: Order cancelled."""

    def __init__(self, order_id: int, order_number: str, user_id: int, from_status: str, released_units: int):
        super().__init__(
            event_type="order.cancelled",
            payload={
                "order_id": order_id,
                "order_number": order_number,
                "user_id": user_id,
                "from_status": from_status,
                "released_units": released_units,
            },
        )
