"""Order domain constants.

Defines the status choices, the single-step transition table used by
``advance`` and the fixed messages shown to customers and kitchen staff.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    CREATED = "CREATED", "Criado"
    SENT = "SENT", "Enviado"
    RECEIVED = "RECEIVED", "Recebido"
    IN_PREPARATION = "IN_PREPARATION", "Em preparação"
    READY = "READY", "Pronto"
    FINISHED = "FINISHED", "Finalizado"


# CREATED is the pre-submission state and FINISHED is terminal: neither
# has an entry, so ``advance`` refuses both.
NEXT_STATUS: dict[str, str] = {
    OrderStatus.SENT: OrderStatus.RECEIVED,
    OrderStatus.RECEIVED: OrderStatus.IN_PREPARATION,
    OrderStatus.IN_PREPARATION: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.FINISHED,
}

# Statuses shown on the kitchen monitor.
MONITOR_STATUSES: tuple[str, ...] = (
    OrderStatus.RECEIVED,
    OrderStatus.IN_PREPARATION,
    OrderStatus.READY,
)

PREPARATION_WINDOW_MINUTES = 30

# Customer-facing messages (kept verbatim, clients match on them).
MSG_CANNOT_ADVANCE = "Não é possível avançar o status deste pedido."
MSG_NO_STATUS = "A ordem não possui status."
MSG_READY = "Pedindo pronto para retirada"
MSG_DELIVERED = "Pedido entregue ao cliente"
MSG_DEADLINE_EXPIRED = "O prazo de preparacao do pedido expirou"
MSG_REMAINING_PREFIX = "Tempo restante:"
