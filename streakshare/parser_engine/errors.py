from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .catalog import GameGrammar


class ShareParseError(Exception):
    """Base class for terminal parse failures. Caught by the router."""

    reason = "Unknown game format"


class UnrecognizedShare(ShareParseError):
    """No grammar's trigger matched the shared text."""


class UnparseableShare(ShareParseError):
    """A grammar was selected but none of its patterns matched."""

    def __init__(self, grammar: "GameGrammar") -> None:
        self.grammar = grammar
        self.reason = f"Couldn't parse {grammar.label} result"
        super().__init__(self.reason)
