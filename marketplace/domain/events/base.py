from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class DomainEvent:
    """Base class for all domain events. ``payload`` is what the event bus carries."""

    event_type: str
    payload: Dict[str, Any] = field(default_factory=dict)
