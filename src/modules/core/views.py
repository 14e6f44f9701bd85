"""Liveness/readiness endpoint (``GET /health``).

Probes the database and the cache, and reports the outbox backlog so a
stalled relay worker shows up before order events pile up.
"""

import time
from typing import Any, Callable, Dict

import structlog
from django.core.cache import cache
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

from modules.core.models import EventStatus, OutboxEvent

logger = structlog.get_logger()


def _check_database() -> None:
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _check_cache() -> None:
    cache.set("_health_check", "ok", 10)
    if cache.get("_health_check") != "ok":
        raise ConnectionError("Cache read failed")


def _probe(name: str, check: Callable[[], None]) -> Dict[str, Any]:
    start = time.monotonic()
    try:
        check()
    except Exception:
        logger.exception("health_check.probe_failed", service=name)
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    services = {
        "database": _probe("database", _check_database),
        "cache": _probe("cache", _check_cache),
    }
    healthy = all(s["status"] == "up" for s in services.values())

    if services["database"]["status"] == "up":
        services["outbox"] = {
            "pending": OutboxEvent.objects.filter(
                status=EventStatus.PENDING
            ).count(),
            "failed": OutboxEvent.objects.filter(status=EventStatus.FAILED).count(),
        }

    status = "healthy" if healthy else "unhealthy"
    logger.info("health_check.completed", status=status)

    return JsonResponse(
        {
            "status": status,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )
