# streakshare/telegram/ux.py
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from streakshare.parser_engine.catalog import CATALOG
from streakshare.parser_engine.contract import ParseOutcome

ReplyTuple = Tuple[str, Optional[Dict[str, Any]]]

MANUAL_ENTRY_HINT = "You can still add this result by hand in the app."


def supported_games_text() -> str:
    lines = ["🧩 I can read share texts from:"]
    for grammar in CATALOG:
        lines.append(f"• {grammar.label}")
    lines.append("")
    lines.append("Paste the text exactly as the game shares it.")
    return "\n".join(lines)


def _score_line(record: Dict[str, Any]) -> Optional[str]:
    data = record.get("parsedData") or {}
    score = record.get("score")

    if "displayScore" in data:
        return f"• Result: {data['displayScore']}"
    if score is None:
        return "• Result: failed"
    if record.get("maxAttempts"):
        return f"• Score: {score}/{record['maxAttempts']}"
    return f"• Score: {score}"


def build_reply_for_outcome(outcome: ParseOutcome) -> ReplyTuple:
    """
    Build a *user-facing* reply from a parse outcome.

    Returns:
        (text, reply_markup_dict_or_None)
    """
    # --- FAILURE --------------------------------------------------------------
    if not outcome.ok:
        lines = [f"⚠️ {outcome.message}", "", MANUAL_ENTRY_HINT]
        if outcome.status == "unrecognized":
            lines.append("Send /games to see what I can read.")
        return "\n".join(lines), None

    # --- ASSEMBLED ------------------------------------------------------------
    record = outcome.result.to_dict()
    data = record["parsedData"]

    lines = [f"✅ {outcome.message}"]
    if "puzzleNumber" in data:
        lines.append(f"• Puzzle: #{data['puzzleNumber']}")
    score_line = _score_line(record)
    if score_line:
        lines.append(score_line)
    lines.append("• Completed" if record["completed"] else "• Not completed")

    if data.get("hardMode") == "true":
        lines.append("• Hard mode 💪")

    return "\n".join(lines), None
