"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings
from ...db.supabase import get_supabase_client

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/roster", status_code=status.HTTP_200_OK)
def health_roster() -> dict:
    """Report where the customer roster will be loaded from."""
    if get_supabase_client():
        return {"source": "database", "table": settings.customers_table}
    customer_file = settings.customer_file
    return {
        "source": "file",
        "fileName": customer_file.name,
        "exists": customer_file.exists(),
    }
