"""Order status machine.

The legal progression is a lookup table (``NEXT_STATUS``) keyed by the
current status; ``advance`` moves exactly one step along it.  ``set_status``
is the administrative escape hatch and performs no legality check.

Both mutate the given order in place and return it.  The only side effect
besides the status itself is stamping ``received_at`` the first time an
order becomes RECEIVED.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from django.utils import timezone

from modules.orders.constants import (
    MSG_CANNOT_ADVANCE,
    MSG_NO_STATUS,
    NEXT_STATUS,
    OrderStatus,
)
from modules.orders.domain import Order
from modules.orders.exceptions import IllegalOrderState


def next_status(current: Optional[str]) -> OrderStatus:
    """Return the status that follows *current*.

    Raises:
        IllegalOrderState: *current* is unset, CREATED, or terminal.
    """
    if current is None:
        raise IllegalOrderState(MSG_NO_STATUS, IllegalOrderState.UNDEFINED_STATE)
    try:
        return OrderStatus(NEXT_STATUS[current])
    except KeyError:
        reason = (
            IllegalOrderState.NOT_SUBMITTED
            if current == OrderStatus.CREATED
            else IllegalOrderState.TERMINAL_STATE
        )
        raise IllegalOrderState(MSG_CANNOT_ADVANCE, reason) from None


def _mark_received(order: Order, now: Optional[datetime]) -> None:
    if order.received_at is None:
        order.received_at = now or timezone.now()


def set_status(
    order: Order, new_status: OrderStatus, now: Optional[datetime] = None
) -> Order:
    """Overwrite the status unconditionally (administrative correction)."""
    order.status = OrderStatus(new_status)
    if order.status == OrderStatus.RECEIVED:
        _mark_received(order, now)
    return order


def advance(order: Order, now: Optional[datetime] = None) -> Order:
    """Move *order* one step forward.

    The order is left untouched when the transition is refused.

    Raises:
        IllegalOrderState: see ``next_status``.
    """
    order.status = next_status(order.status)
    if order.status == OrderStatus.RECEIVED:
        _mark_received(order, now)
    return order
