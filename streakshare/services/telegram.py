# streakshare/services/telegram.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests

from streakshare import config


def _post(endpoint: str, payload: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    url = f"{config.TELEGRAM_API_BASE}/{endpoint}"
    try:
        response = requests.post(url, json=payload, timeout=10)
    except requests.RequestException as e:
        logging.error("[TELEGRAM ERROR %s] %s", endpoint, e)
        return False, str(e)

    if response.status_code != 200:
        logging.error("[TELEGRAM ERROR %s] %s %s", endpoint, response.status_code, response.text)
        return False, f"HTTP {response.status_code}"
    return True, None


def send_message(
    chat_id: int | str,
    text: str,
    reply_markup: Optional[Dict[str, Any]] = None,
) -> Tuple[bool, Optional[str]]:
    """
    Send a message to a Telegram chat.

    reply_markup can be an inline keyboard dict, e.g.:
    {
        "inline_keyboard": [[{"text": "Button", "callback_data": "foo"}]]
    }
    """
    payload: Dict[str, Any] = {
        "chat_id": chat_id,
        "text": text,
        "parse_mode": "Markdown",
    }
    if reply_markup is not None:
        payload["reply_markup"] = reply_markup

    return _post("sendMessage", payload)
