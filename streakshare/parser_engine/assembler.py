from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from ..utils.time import now_utc
from .catalog import GameGrammar
from .contract import SOURCE_TAG, Derived, GameResult


def assemble(
    grammar: GameGrammar,
    derived: Derived,
    raw_text: str,
    timestamp: Optional[datetime] = None,
) -> GameResult:
    """
    Combine the game identity, the derived values and the untouched share
    text into one GameResult.

    parsedData keeps puzzleNumber first and always ends with source.
    """
    parsed_data = {}
    if "puzzleNumber" in derived.fields:
        parsed_data["puzzleNumber"] = derived.fields["puzzleNumber"]
    for key, value in derived.fields.items():
        if key not in ("puzzleNumber", "source"):
            parsed_data[key] = str(value)
    parsed_data["source"] = SOURCE_TAG

    return GameResult(
        id=str(uuid.uuid4()),
        game_id=grammar.game_id,
        game_name=grammar.name,
        date=timestamp or now_utc(),
        score=derived.score,
        max_attempts=derived.max_attempts,
        completed=derived.completed,
        shared_text=raw_text,
        parsed_data=parsed_data,
    )
