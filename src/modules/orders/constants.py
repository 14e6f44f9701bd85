"""Order domain constants.

Fulfillment statuses (``status_detalhado``), payment statuses and the
transition tables of the two fulfillment branches (pickup and delivery).
"""

from django.db import models


class FulfillmentStatus(models.TextChoices):
    AWAITING_PREPARATION = "aguardando_preparacao", "Aguardando preparação"
    AWAITING_ACCEPTANCE = "aguardando_aceite", "Aguardando aceite"
    PREPARING = "preparando_pedido", "Preparando pedido"
    READY_FOR_PICKUP = "pronto_para_retirada", "Pronto para retirada"
    PICKED_UP = "retirado", "Retirado"
    ACCEPTED = "aceito", "Aceito"
    IN_TRANSIT = "a_caminho", "A caminho"
    DELIVERED = "entregue", "Entregue"
    CANCELLED = "cancelado", "Cancelado"


class PaymentStatus(models.TextChoices):
    PENDING = "pendente", "Pendente"
    PAID = "pago", "Pago"
    CANCELLED = "cancelado", "Cancelado"


class DeliveryKind(models.TextChoices):
    PICKUP = "retirada", "Retirada"
    DELIVERY = "entrega", "Entrega"


PENDING_STATES: frozenset[str] = frozenset(
    {FulfillmentStatus.AWAITING_PREPARATION, FulfillmentStatus.AWAITING_ACCEPTANCE}
)

PICKUP_TRANSITIONS: dict[str, tuple[str, ...]] = {
    FulfillmentStatus.PREPARING: (FulfillmentStatus.READY_FOR_PICKUP,),
    FulfillmentStatus.READY_FOR_PICKUP: (FulfillmentStatus.PICKED_UP,),
}

_DELIVERY_TARGETS: tuple[str, ...] = (
    FulfillmentStatus.IN_TRANSIT,
    FulfillmentStatus.DELIVERED,
    FulfillmentStatus.CANCELLED,
)

# From an active delivery state any delivery target except the current one.
DELIVERY_TRANSITIONS: dict[str, tuple[str, ...]] = {
    FulfillmentStatus.ACCEPTED: _DELIVERY_TARGETS,
    FulfillmentStatus.IN_TRANSIT: tuple(
        s for s in _DELIVERY_TARGETS if s != FulfillmentStatus.IN_TRANSIT
    ),
}

TERMINAL_STATES: frozenset[str] = frozenset(
    {
        FulfillmentStatus.PICKED_UP,
        FulfillmentStatus.DELIVERED,
        FulfillmentStatus.CANCELLED,
    }
)

COMPLETED_STATES: frozenset[str] = frozenset(
    {FulfillmentStatus.PICKED_UP, FulfillmentStatus.DELIVERED}
)

# Entering one of these stamps ``delivered_at``.
DELIVERY_STAMP_STATES = COMPLETED_STATES

ACCEPTED_STATE_MESSAGES: dict[str, str] = {
    FulfillmentStatus.PREPARING: "sendo preparado",
    FulfillmentStatus.ACCEPTED: "confirmado",
}

DEFAULT_REJECTION_REASON = "Pedido recusado pelo revendedor"

ORDER_NUMBER_MAX_RETRIES = 5
