from __future__ import annotations

import logging
from typing import Optional, Sequence

from .catalog import CATALOG, GameGrammar
from .errors import UnrecognizedShare


# ---------------------------------------------------------------------------
# TRIGGER-BASED CLASSIFICATION
# ---------------------------------------------------------------------------

def classify(text: str, catalog: Sequence[GameGrammar] = CATALOG) -> Optional[GameGrammar]:
    """
    Return the first grammar (in catalog order) whose trigger matches.

    Triggers are plain case-sensitive substring checks, so this never
    looks at the text more than once per trigger.
    """
    if not text or not text.strip():
        return None

    for grammar in catalog:
        if grammar.matches(text):
            logging.debug("[CLASSIFY] %s", grammar.name)
            return grammar

    return None


def require_grammar(text: str) -> GameGrammar:
    """Like classify(), but raise UnrecognizedShare when nothing matches."""
    grammar = classify(text)
    if grammar is None:
        logging.info("[CLASSIFY] no trigger matched (%d chars)", len(text or ""))
        raise UnrecognizedShare()
    return grammar
