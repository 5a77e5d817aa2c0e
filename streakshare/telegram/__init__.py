# streakshare/telegram/__init__.py
from .ux import (
    build_reply_for_outcome,
    supported_games_text,
)

__all__ = [
    "build_reply_for_outcome",
    "supported_games_text",
]
