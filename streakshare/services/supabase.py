from __future__ import annotations

import logging
from typing import Any, Optional

from supabase import create_client, Client

from streakshare import config

# ================================
# LAZY SUPABASE CLIENT
# ================================
_client: Optional[Client] = None


def get_client() -> Client:
    """
    Build the Supabase client on first use, so importing this module
    does not need credentials.
    """
    global _client
    if _client is None:
        if not config.SUPABASE_URL or not config.SUPABASE_ANON_KEY:
            raise RuntimeError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
        _client = create_client(config.SUPABASE_URL, config.SUPABASE_ANON_KEY)
    return _client


def set_client(client: Optional[Client]) -> None:
    """Swap the client (tests inject a fake one, None resets)."""
    global _client
    _client = client


# ================================
# CORE INSERT FOR GAME RESULTS
# ================================
def insert_record(table: str, data: dict):
    """
    Insert one row into Supabase.
    Returns:
        (response, error_str)
    """
    try:
        response = get_client().table(table).insert(data).execute()
        return response, None
    except Exception as e:  # noqa: BLE001
        logging.error("[SUPABASE ERROR %s] %s", table, e)
        return None, str(e)


def upsert_value(table: str, key: str, value: Any):
    """
    Write one key/value row, replacing any previous value.
    Returns:
        (response, error_str)
    """
    try:
        response = (
            get_client()
            .table(table)
            .upsert({"key": key, "value": value}, on_conflict="key")
            .execute()
        )
        return response, None
    except Exception as e:  # noqa: BLE001
        logging.error("[SUPABASE ERROR %s:%s] %s", table, key, e)
        return None, str(e)


def fetch_value(table: str, key: str):
    """
    Read one key/value row.
    Returns:
        (value_or_None, error_str)
    """
    try:
        response = (
            get_client()
            .table(table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
    except Exception as e:  # noqa: BLE001
        logging.error("[SUPABASE ERROR %s:%s] %s", table, key, e)
        return None, str(e)

    rows = response.data or []
    if not rows:
        return None, None
    return rows[0].get("value"), None


# ================================
# SHADOW LOGGING — entries table
# ================================
def log_entry(
    raw_text: str,
    parsed: dict | None = None,
    game: str | None = None,
    error: str | None = None,
    chat_id: str | None = None,
):
    """
    Log ANY share for debugging/auditing.
    This MUST NEVER interrupt the main pipeline.
    """
    payload = {
        "chat_id": chat_id,
        "raw_text": raw_text,
        "parsed": parsed,
        "game": game,
        "error": error,
    }

    try:
        get_client().table(config.ENTRIES_TABLE).insert(payload).execute()
        logging.debug("[ENTRIES LOGGED] game=%s error=%s", game, error)
    except Exception as e:  # noqa: BLE001
        logging.error("[SUPABASE ERROR %s] %s", config.ENTRIES_TABLE, e)
