from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from .assembler import assemble
from .classifier import require_grammar
from .contract import ParseOutcome
from .errors import ShareParseError, UnparseableShare
from .grammar import extract
from .symbols import decode_lines
from .validator import validate_record


def parse_shared_text(text: str, timestamp: Optional[datetime] = None) -> ParseOutcome:
    """
    High-level entrypoint for shared TEXT.

    Pipeline:
    1. Select the game by trigger (first match in catalog order).
    2. Run the game's extraction patterns (cleaned text, then raw).
    3. Decode the emoji grid and apply the game's derive rule.
    4. Assemble the GameResult and check it against the JSON schema.

    Never raises for bad input: failures come back as a ParseOutcome with
    the user-visible reason in .message.
    """
    try:
        grammar = require_grammar(text)
        captures = extract(text, grammar)
        derived = grammar.derive(captures, decode_lines(captures.text))
    except UnparseableShare as e:
        return ParseOutcome.unparseable(e.grammar.name, e.reason)
    except ShareParseError as e:
        return ParseOutcome.unrecognized(e.reason)

    result = assemble(grammar, derived, text, timestamp=timestamp)

    # Schema validation: a rejected record is a bug in a derive rule
    is_valid, err = validate_record(result.to_dict())
    if not is_valid:
        logging.error("[SCHEMA] %s record failed validation: %s", grammar.name, err)
        return ParseOutcome.unparseable(
            grammar.name,
            UnparseableShare(grammar).reason,
            issues=[f"Schema validation failed: {err}"],
        )

    logging.info(
        "[PARSE] %s #%s score=%s completed=%s",
        grammar.name, result.puzzle_number or "-", result.score, result.completed,
    )
    return ParseOutcome.assembled(grammar.label, result)


def parse_text_message(text: str) -> Dict[str, Any]:
    """Same as parse_shared_text, returned as a plain JSON-ready dict."""
    return parse_shared_text(text).to_dict()
