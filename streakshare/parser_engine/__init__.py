"""
Streakshare Parser Engine

This package contains the deterministic pipeline used to:
- Classify shared puzzle results into one of the supported games
- Extract fields, derive score / completion and assemble a GameResult
- Validate the record against the GameResult JSON schema.

Nothing in this package should talk directly to Flask, Telegram, or Supabase.
It is pure logic.
"""

from .catalog import CATALOG, GameGrammar, get_grammar
from .contract import GameResult, ParseOutcome
from .router import parse_shared_text, parse_text_message

__all__ = [
    "CATALOG",
    "GameGrammar",
    "GameResult",
    "ParseOutcome",
    "get_grammar",
    "parse_shared_text",
    "parse_text_message",
]
