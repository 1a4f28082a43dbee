"""Human-readable order numbers: ``NLR`` + base-36 millisecond timestamp + random suffix."""

import secrets
import string
import time
from typing import Callable, Optional

from django.conf import settings


BASE36_ALPHABET = string.digits + string.ascii_uppercase
SUFFIX_LENGTH = 4


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding needs a non-negative integer")
    if value == 0:
        return "0"

    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_order_number(
    prefix: Optional[str] = None,
    now_ms: Optional[int] = None,
    choice: Callable[[str], str] = secrets.choice,
) -> str:
    """
    Build a new order number.

    Uniqueness is enforced by the database column; callers retry on collision.

    Example:
        >>> generate_order_number(prefix="NLR", now_ms=0, choice=lambda s: "A")
        'NLR0AAAA'
    """
    prefix = prefix if prefix is not None else getattr(settings, "ORDER_NUMBER_PREFIX", "NLR")
    if now_ms is None:
        now_ms = int(time.time() * 1000)

    suffix = "".join(choice(BASE36_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{prefix}{to_base36(now_ms)}{suffix}"
