"""Liveness endpoint for load balancers and the storefront's own checks.

Each probe times one dependency: the database holding the catalog and
the order ledger, the cache used by throttling, and the file storage
that receives product images.
"""

import time
from typing import Any, Callable, Dict

import structlog
from django.core.cache import cache
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.db import DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger()

_PROBE_FILE = "_health_check.txt"


def _probe_database() -> None:
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _probe_cache() -> None:
    cache.set("_health_check", "ok", 10)
    if cache.get("_health_check") != "ok":
        raise ConnectionError("Cache read failed")


def _probe_storage() -> None:
    name = default_storage.save(_PROBE_FILE, ContentFile(b"ok"))
    default_storage.delete(name)


PROBES: Dict[str, Callable[[], None]] = {
    "database": _probe_database,
    "cache": _probe_cache,
    "storage": _probe_storage,
}


def _run(name: str, probe: Callable[[], None]) -> Dict[str, Any]:
    start = time.monotonic()
    try:
        probe()
    except (DatabaseError, ConnectionError, OSError) as exc:
        logger.error("health_check.probe_failed", service=name, error=str(exc))
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    services = {name: _run(name, probe) for name, probe in PROBES.items()}
    healthy = all(s["status"] == "up" for s in services.values())
    overall = "healthy" if healthy else "unhealthy"

    logger.info("health_check.completed", status=overall)

    return JsonResponse(
        {
            "status": overall,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )
