from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Blueprint, jsonify, request

from streakshare.ingest import ingest_share
from streakshare.services.supabase import log_entry
from streakshare.services.telegram import send_message
from streakshare.telegram import build_reply_for_outcome, supported_games_text

api = Blueprint("api", __name__)

NO_CONTENT_MESSAGE = "No content"
INTERNAL_ERROR_MESSAGE = "❌ I hit an internal error while reading that. Try again."

GAMES_COMMANDS = {"/start", "/games", "/help", "games"}


def _scrub_surrogates(text: str) -> str:
    # JSON escapes like "\ud800" decode to lone surrogates, which cannot be
    # stored or echoed back as UTF-8.
    return text.encode("utf-8", "replace").decode("utf-8")


def _share_text_from_request() -> Optional[str]:
    """Accept {"text": ...} JSON or a plain text body."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        text = payload.get("text")
        return _scrub_surrogates(text) if isinstance(text, str) else None
    body = request.get_data(as_text=True)
    return body or None


@api.route("/", methods=["GET"])
def healthcheck() -> str:
    return "Streakshare running"


@api.route("/share", methods=["POST"])
def share() -> Any:
    """
    Share-extension endpoint: parse the posted text and publish the result.
    """
    text = _share_text_from_request()
    if not text or not text.strip():
        return jsonify({"ok": False, "message": NO_CONTENT_MESSAGE, "result": None}), 400

    try:
        outcome, error = ingest_share(text)
    except Exception as e:  # noqa: BLE001
        logging.exception("[SHARE ERROR] %s", e)
        return jsonify({"ok": False, "message": "Internal error", "result": None}), 500

    result = outcome.result.to_dict() if outcome.ok else None
    if error:
        return jsonify({"ok": False, "message": f"Could not save result: {error}", "result": result}), 502

    return jsonify({"ok": outcome.ok, "message": outcome.message, "result": result}), 200


@api.route("/webhook", methods=["POST"])
def webhook() -> Any:
    """
    Telegram webhook endpoint.

    Handles:
    - /start, /games: list the supported games
    - anything else: treated as a pasted share text
    """
    update: Dict[str, Any] = request.get_json(silent=True) or {}

    message = update.get("message")
    if not message or "text" not in message:
        # Ignore non-text updates
        return jsonify({"ok": True})

    chat = message.get("chat") or {}
    chat_id = chat.get("id")
    raw_text = message.get("text", "").strip()

    if not chat_id or not raw_text:
        return jsonify({"ok": True})

    if raw_text.lower() in GAMES_COMMANDS:
        send_message(chat_id, supported_games_text())
        return jsonify({"ok": True})

    try:
        outcome, error = ingest_share(raw_text, chat_id=str(chat_id))
    except Exception as e:  # noqa: BLE001
        logging.exception("[PARSER ERROR] %s", e)
        send_message(chat_id, INTERNAL_ERROR_MESSAGE)
        log_entry(raw_text=raw_text, parsed={}, game="error", error=str(e), chat_id=str(chat_id))
        return jsonify({"ok": False})

    if error:
        send_message(chat_id, f"❌ Could not save result.\n{error}")
        return jsonify({"ok": False})

    reply_text, reply_markup = build_reply_for_outcome(outcome)
    send_message(chat_id, reply_text, reply_markup=reply_markup)
    return jsonify({"ok": True})
