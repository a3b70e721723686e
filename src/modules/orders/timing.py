"""Remaining preparation time shown on order screens."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from django.utils import timezone

from modules.orders.constants import (
    MSG_DEADLINE_EXPIRED,
    MSG_DELIVERED,
    MSG_READY,
    MSG_REMAINING_PREFIX,
    PREPARATION_WINDOW_MINUTES,
    OrderStatus,
)


def remaining_time_message(
    received_at: Optional[datetime],
    status: Optional[str],
    now: Optional[datetime] = None,
) -> Optional[str]:
    """Describe how much of the preparation window is left.

    Orders that were never received have no message.  Elapsed time is
    truncated to whole minutes before comparing with the window; a reception
    time in the future (clock skew) counts as no time elapsed.
    """
    if received_at is None:
        return None
    if status == OrderStatus.READY:
        return MSG_READY
    if status == OrderStatus.FINISHED:
        return MSG_DELIVERED

    now = now or timezone.now()
    elapsed = max(0, int((now - received_at).total_seconds() // 60))
    if elapsed >= PREPARATION_WINDOW_MINUTES:
        return MSG_DEADLINE_EXPIRED
    return f"{MSG_REMAINING_PREFIX} {PREPARATION_WINDOW_MINUTES - elapsed} minutos"
