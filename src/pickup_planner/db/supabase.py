"""Supabase access for the user store that backs the customer roster."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Mapping

from supabase import Client, create_client

from ..config import settings


def supabase_configured() -> bool:
    return bool(settings.supabase_url and settings.supabase_key)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Return the cached client, or None when credentials are missing or rejected.

    Creating the client does not open a connection; queries can still fail later.
    """
    if not supabase_configured():
        logging.debug("Supabase credentials not configured, roster will be read from file")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


def select_rows(client: Client, table: str, columns: str, **filters: Any) -> list[Mapping[str, Any]]:
    """Run ``select columns from table where key = value ...`` and return the raw rows."""
    query = client.table(table).select(columns)
    for column, value in filters.items():
        query = query.eq(column, value)
    response = query.execute()
    return list(response.data or [])
