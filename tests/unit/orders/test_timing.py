"""Unit tests for the remaining-time message."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from freezegun import freeze_time

from modules.orders.constants import OrderStatus
from modules.orders.timing import remaining_time_message

pytestmark = pytest.mark.unit

RECEIVED_AT = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def at(minutes: float) -> datetime:
    return RECEIVED_AT + timedelta(minutes=minutes)


class TestRemainingTimeMessage:
    def test_not_received_has_no_message(self):
        assert remaining_time_message(None, OrderStatus.SENT, now=at(5)) is None

    def test_not_received_wins_over_ready(self):
        assert remaining_time_message(None, OrderStatus.READY, now=at(5)) is None

    def test_ready(self):
        assert (
            remaining_time_message(RECEIVED_AT, OrderStatus.READY, now=at(50))
            == "Pedindo pronto para retirada"
        )

    def test_finished(self):
        assert (
            remaining_time_message(RECEIVED_AT, OrderStatus.FINISHED, now=at(50))
            == "Pedido entregue ao cliente"
        )

    @pytest.mark.parametrize(
        "elapsed, expected",
        [
            (0, "Tempo restante: 30 minutos"),
            (10, "Tempo restante: 20 minutos"),
            (10.9, "Tempo restante: 20 minutos"),
            (29, "Tempo restante: 1 minutos"),
            (29.99, "Tempo restante: 1 minutos"),
        ],
    )
    def test_inside_window(self, elapsed, expected):
        message = remaining_time_message(
            RECEIVED_AT, OrderStatus.IN_PREPARATION, now=at(elapsed)
        )
        assert message == expected

    @pytest.mark.parametrize("elapsed", [30, 31, 45, 600])
    def test_window_expired(self, elapsed):
        message = remaining_time_message(
            RECEIVED_AT, OrderStatus.RECEIVED, now=at(elapsed)
        )
        assert message == "O prazo de preparacao do pedido expirou"

    @pytest.mark.parametrize("ahead", [0.5, 1, 5, 90])
    def test_reception_in_the_future_counts_as_zero(self, ahead):
        message = remaining_time_message(
            RECEIVED_AT, OrderStatus.IN_PREPARATION, now=at(-ahead)
        )
        assert message == "Tempo restante: 30 minutos"

    def test_received_status_uses_window(self):
        message = remaining_time_message(RECEIVED_AT, OrderStatus.RECEIVED, now=at(12))
        assert message == "Tempo restante: 18 minutos"

    @freeze_time("2025-03-10 12:25:30")
    def test_defaults_to_current_time(self):
        message = remaining_time_message(RECEIVED_AT, OrderStatus.IN_PREPARATION)
        assert message == "Tempo restante: 5 minutos"
