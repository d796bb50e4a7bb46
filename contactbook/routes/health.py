# contactbook/routes/health.py
"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Request

from contactbook.config import settings
from contactbook.infrastructure.observability.logging import log_health_check

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {"status": "ok", "service": "contactbook"}


@router.get("/readyz")
async def readyz(request: Request):
    """
    Readiness check against the configured key-value store.
    """
    checks = {}
    store = request.app.state.contact_store.repository.store

    t0 = time.time()
    try:
        store_ok = bool(await store.ping())
        latency_ms = round((time.time() - t0) * 1000, 1)
        checks["storage"] = {
            "ok": store_ok,
            "latency_ms": latency_ms,
            "backend": settings.STORAGE_BACKEND,
        }
        log_health_check("storage", store_ok, latency_ms)
    except Exception as e:
        latency_ms = round((time.time() - t0) * 1000, 1)
        checks["storage"] = {
            "ok": False,
            "latency_ms": latency_ms,
            "error": f"{type(e).__name__}: {e}",
        }
        log_health_check("storage", False, latency_ms, error=str(e))

    overall_ok = all(check["ok"] for check in checks.values())
    return {"overall_ok": overall_ok, "checks": checks}
