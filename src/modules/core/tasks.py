"""Tasks assíncronas do módulo core."""

from __future__ import annotations

import structlog
from celery import shared_task
from django.db import transaction
from django.db.models import Q

from modules.core.models import EventStatus, OutboxEvent
from shared.domain.events import event_from_payload
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)

MAX_RELAY_ATTEMPTS = 5
RELAY_BATCH_SIZE = 100


@shared_task(name="core.relay_outbox_events")
def relay_outbox_events(batch_size: int = RELAY_BATCH_SIZE) -> dict:
    """Publica no barramento em memória os eventos pendentes do outbox.

    Cada evento é processado em sua própria transação; falhas de um
    handler marcam apenas aquele evento como ``FAILED`` (com nova
    tentativa até ``MAX_RELAY_ATTEMPTS``).
    """
    pending_ids = list(
        OutboxEvent.objects.filter(
            Q(status=EventStatus.PENDING)
            | Q(status=EventStatus.FAILED, retry_count__lt=MAX_RELAY_ATTEMPTS)
        )
        .order_by("created_at")
        .values_list("id", flat=True)[:batch_size]
    )

    published = 0
    failed = 0
    for event_id in pending_ids:
        with transaction.atomic():
            outbox = (
                OutboxEvent.objects.select_for_update().filter(id=event_id).first()
            )
            if outbox is None or outbox.status == EventStatus.PUBLISHED:
                continue
            try:
                event = event_from_payload(outbox.event_type, outbox.payload)
                event_bus.publish(event)
            except Exception as exc:
                logger.exception(
                    "outbox.relay_failed",
                    outbox_id=str(outbox.id),
                    event_type=outbox.event_type,
                )
                outbox.mark_as_failed(str(exc))
                failed += 1
                continue
            outbox.mark_as_published()
            published += 1

    logger.info("outbox.relay_finished", published=published, failed=failed)
    return {"published": published, "failed": failed}
