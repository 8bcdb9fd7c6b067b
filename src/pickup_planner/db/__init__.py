"""Database clients and utilities."""

from .supabase import get_supabase_client, select_rows, supabase_configured

__all__ = ["get_supabase_client", "select_rows", "supabase_configured"]
