"""
Share ingestion: parse one shared text, publish the record and shadow-log
what happened. Used by both the HTTP endpoints and the CLI.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from streakshare.parser_engine.contract import ParseOutcome, record_summary
from streakshare.parser_engine.router import parse_shared_text
from streakshare.services.share_store import mirror_result, publish_result
from streakshare.services.supabase import log_entry


def ingest_share(
    text: str,
    chat_id: Optional[str] = None,
    publish: bool = True,
) -> Tuple[ParseOutcome, Optional[str]]:
    """
    Returns:
        (outcome, publish_error_or_None)
    """
    outcome = parse_shared_text(text)

    if not outcome.ok:
        log_entry(
            raw_text=text,
            parsed=outcome.to_dict(),
            game=outcome.game,
            error=outcome.status,
            chat_id=chat_id,
        )
        return outcome, None

    record = outcome.result.to_dict()
    if not publish:
        return outcome, None

    ok, error = publish_result(record)
    if not ok:
        logging.error("[PUBLISH ERROR] %s: %s", record_summary(record), error)
        log_entry(raw_text=text, parsed=record, game=outcome.game, error=str(error), chat_id=chat_id)
        return outcome, error

    # The mirror table is secondary: a failed insert is logged, not reported
    ok, error = mirror_result(record)
    if not ok:
        outcome.issues.append(f"Results table insert failed: {error}")

    log_entry(raw_text=text, parsed=record, game=outcome.game, chat_id=chat_id)
    return outcome, None
