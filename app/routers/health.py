# app/routers/health.py
"""
System health check endpoint.
Returns status of backend + bookings file + mail transport configuration.
"""

import os
from fastapi import APIRouter, Depends
from app.store import BookingStore, get_store
from app.config import settings
from datetime import datetime, timezone

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(store: BookingStore = Depends(get_store)):
    """
    Returns:
    - Backend status
    - Bookings file location, whether it exists, and the in-memory count
    - Whether outbound mail is configured (no connection attempt)
    """
    result = {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "backend": "ok",
        "storage": {
            "path": os.path.abspath(store.path),
            "exists": os.path.exists(store.path),
            "bookings": len(store),
        },
        "mail": "configured" if settings.MAIL_CONFIGURED else "not configured",
    }

    if not settings.MAIL_CONFIGURED:
        result["status"] = "degraded"

    return result
