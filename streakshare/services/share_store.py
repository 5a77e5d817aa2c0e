"""
Share store: the hand-off point between the share parser and the app that
shows streaks.

Three well-known keys live in a Supabase key/value table:
- latestGameResult: the most recent record
- gameResults: every record not yet picked up, oldest first
- lastShareExtensionSave: ISO timestamp, bumped on every publish so the
  reader knows there is something new

The queue is a single JSON value updated by read, append and write back.
publish_result serializes that under a process-wide lock, so the service
must run as one worker process; threads inside it are safe.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

from streakshare import config
from streakshare.utils.time import iso_timestamp

from .supabase import fetch_value, insert_record, upsert_value

Record = Dict[str, Any]

_publish_lock = threading.Lock()


def _read_queue() -> Tuple[List[Record], Optional[str]]:
    value, error = fetch_value(config.SHARE_STORE_TABLE, config.QUEUED_RESULTS_KEY)
    if error:
        return [], error
    if not isinstance(value, list):
        if value is not None:
            logging.warning("[SHARE STORE] %s is not a list, ignoring", config.QUEUED_RESULTS_KEY)
        return [], None
    return value, None


def load_queue() -> List[Record]:
    """Records published but not yet picked up, oldest first."""
    queue, _ = _read_queue()
    return queue


def publish_result(record: Record) -> Tuple[bool, Optional[str]]:
    """
    Make one assembled record visible to the reader.

    The queue write happens before the timestamp bump, so a reader that sees
    a new lastShareExtensionSave also sees the record.
    Returns:
        (ok, error_str)
    """
    table = config.SHARE_STORE_TABLE

    with _publish_lock:
        _, error = upsert_value(table, config.LATEST_RESULT_KEY, record)
        if error:
            return False, error

        queue, error = _read_queue()
        if error:
            return False, error
        if not any(item.get("id") == record.get("id") for item in queue):
            queue.append(record)
        _, error = upsert_value(table, config.QUEUED_RESULTS_KEY, queue)
        if error:
            return False, error

        _, error = upsert_value(table, config.LAST_SAVE_KEY, iso_timestamp())
        if error:
            return False, error

    logging.info("[SHARE STORE] published %s (%d queued)", record.get("gameName"), len(queue))
    return True, None


def mirror_result(record: Record) -> Tuple[bool, Optional[str]]:
    """Insert the record into the results table as a flat row."""
    row = {
        "id": record["id"],
        "game_id": record["gameId"],
        "game_name": record["gameName"],
        "date": record["date"],
        "score": record["score"],
        "max_attempts": record["maxAttempts"],
        "completed": record["completed"],
        "shared_text": record["sharedText"],
        "parsed_data": record["parsedData"],
    }
    response, error = insert_record(config.RESULTS_TABLE, row)
    return response is not None, error
