"""
Game catalog.

One GameGrammar per supported game, kept in classification priority order.
Several games share vocabulary ("Wordle" appears inside Quordle shares,
"Connections" inside unrelated posts), so the order is load-bearing: the
more specific grammar must come first.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .derivers import (
    DeriveFn,
    derive_connections,
    derive_guess_count,
    derive_mini_crossword,
    derive_mini_sudoku,
    derive_octordle,
    derive_pinpoint,
    derive_pips,
    derive_quordle,
    derive_spelling_bee,
    derive_strands,
    timed,
)
from .grammar import Extraction

GAME_ID_PREFIX = "550e8400-e29b-41d4-a716-446655"

# "1492", "1,492", "1.492", "1 492" (plain, no-break and thin spaces)
PUZZLE = r"(?P<puzzle>\d{1,3}(?:[,. \u00a0\u2009\u202f]\d{3})+|\d+)"
CLOCK = r"(?P<time>\b\d{1,2}(?::\d{2}){1,2}\b)"


def _rx(pattern: str) -> "re.Pattern[str]":
    return re.compile(pattern, re.IGNORECASE)


@dataclass(frozen=True)
class GameGrammar:
    """
    Everything the pipeline knows about one game.

    triggers:    alternatives of substrings that must ALL be present
                 (case-sensitive) for the game to be selected
    extractions: tried in order by the grammar engine
    decorative:  glyphs stripped from the cleaned text variant
    """
    name: str
    game_id: str
    label: str
    triggers: Tuple[Tuple[str, ...], ...]
    extractions: Tuple[Extraction, ...]
    derive: DeriveFn
    decorative: str = ""

    def matches(self, text: str) -> bool:
        return any(all(part in text for part in trigger) for trigger in self.triggers)


def _game_id(suffix: str) -> str:
    return f"{GAME_ID_PREFIX}{suffix}"


def _timed_extraction(title: str, **optional: "re.Pattern[str]") -> Tuple[Extraction, ...]:
    fields = {"time": _rx(CLOCK)}
    fields.update(optional)
    return (Extraction(header=_rx(rf"{title}\s*#\s*{PUZZLE}"), optional=fields),)


CATALOG: Tuple[GameGrammar, ...] = (
    GameGrammar(
        name="pips",
        game_id=_game_id("440006"),
        label="Pips",
        triggers=(("Pips #",),),
        extractions=(
            Extraction(
                header=_rx(rf"Pips\s*#\s*{PUZZLE}\s+(?P<difficulty>Easy|Medium|Hard)\b"),
                required={"time": _rx(CLOCK)},
            ),
        ),
        derive=derive_pips,
        decorative="🟢🟡🟠🟤⚫⚪",
    ),
    GameGrammar(
        name="quordle",
        game_id=_game_id("440001"),
        label="Quordle",
        triggers=(("Daily Quordle",),),
        extractions=(Extraction(header=_rx(rf"Daily\s+Quordle\s*(?:#\s*)?{PUZZLE}")),),
        derive=derive_quordle,
    ),
    GameGrammar(
        name="wordle",
        game_id=_game_id("440000"),
        label="Wordle",
        triggers=(("Wordle",),),
        extractions=(
            Extraction(
                header=_rx(rf"Wordle\s+{PUZZLE}\s+(?P<guesses>[X1-6])/6(?P<hard>\*?)"),
            ),
        ),
        derive=derive_guess_count,
    ),
    GameGrammar(
        name="nerdle",
        game_id=_game_id("440002"),
        label="Nerdle",
        triggers=(("nerdlegame",),),
        extractions=(
            Extraction(header=_rx(rf"nerdlegame\s+{PUZZLE}\s+(?P<guesses>[X1-6])/6")),
        ),
        derive=derive_guess_count,
    ),
    GameGrammar(
        name="connections",
        game_id=_game_id("440003"),
        label="Connections",
        triggers=(("Connections", "Puzzle #"),),
        extractions=(Extraction(header=_rx(rf"Puzzle\s*#\s*{PUZZLE}")),),
        derive=derive_connections,
    ),
    GameGrammar(
        name="strands",
        game_id=_game_id("440007"),
        label="Strands",
        triggers=(("Strands #",),),
        extractions=(
            Extraction(
                header=_rx(rf"Strands\s*#\s*{PUZZLE}"),
                optional={"theme": _rx(r"[\"“](?P<theme>[^\"”\n]{1,200})[\"”]")},
            ),
        ),
        derive=derive_strands,
    ),
    GameGrammar(
        name="linkedinqueens",
        game_id=_game_id("440100"),
        label="LinkedIn Queens",
        triggers=(("Queens #",),),
        extractions=_timed_extraction("Queens"),
        derive=timed("logic_puzzle"),
    ),
    GameGrammar(
        name="linkedintango",
        game_id=_game_id("440101"),
        label="LinkedIn Tango",
        triggers=(("Tango #",),),
        extractions=_timed_extraction("Tango"),
        derive=timed("logic_puzzle"),
    ),
    GameGrammar(
        name="linkedincrossclimb",
        game_id=_game_id("440102"),
        label="LinkedIn Crossclimb",
        triggers=(("Crossclimb #",),),
        extractions=_timed_extraction("Crossclimb"),
        derive=timed("word_association"),
    ),
    GameGrammar(
        name="linkedinpinpoint",
        game_id=_game_id("440103"),
        label="LinkedIn Pinpoint",
        triggers=(("Pinpoint #",),),
        extractions=(
            Extraction(
                header=_rx(rf"Pinpoint\s*#\s*{PUZZLE}"),
                required={"ratio": _rx(r"\((?P<guesses>\d+)\s*/\s*(?P<max>\d+)\)")},
                label="emoji_based",
            ),
            Extraction(
                header=_rx(rf"Pinpoint\s*#\s*{PUZZLE}(?:\s*\|\s*(?P<guesses>\d+)\s+guess(?:es)?)?"),
                optional={"later": _rx(r"\b(?P<later>\d+)\s+guess(?:es)?\b")},
                label="original",
            ),
        ),
        derive=derive_pinpoint,
    ),
    GameGrammar(
        name="linkedinzip",
        game_id=_game_id("440104"),
        label="LinkedIn Zip",
        triggers=(("Zip #",),),
        extractions=_timed_extraction(
            "Zip",
            backtracks=_rx(r"(?:with\s+)?\b(?P<backtracks>\d+)\s+backtracks?\b"),
        ),
        derive=timed("connectivity_puzzle", with_backtracks=True),
    ),
    GameGrammar(
        name="linkedinminisudoku",
        game_id=_game_id("440105"),
        label="LinkedIn Mini Sudoku",
        triggers=(("Mini Sudoku #",),),
        extractions=(
            Extraction(
                header=_rx(rf"Mini\s+Sudoku\s*#\s*{PUZZLE}"),
                optional={"time": _rx(CLOCK)},
            ),
        ),
        derive=derive_mini_sudoku,
    ),
    GameGrammar(
        name="octordle",
        game_id=_game_id("440200"),
        label="Octordle",
        triggers=(("Daily Octordle",),),
        extractions=(
            Extraction(
                header=_rx(rf"Daily\s+Octordle\s*(?:#\s*)?{PUZZLE}"),
                optional={"total": _rx(r"Score:\s*(?P<total>\d+)")},
            ),
        ),
        derive=derive_octordle,
    ),
    GameGrammar(
        name="spellingbee",
        game_id=_game_id("440004"),
        label="Spelling Bee",
        triggers=(("Spelling Bee",),),
        extractions=(
            Extraction(
                header=_rx(r"Spelling\s+Bee"),
                required={
                    "score": _rx(r"Score:\s*(?P<score>\d+)"),
                    "words": _rx(r"Words:\s*(?P<words>\d+)"),
                    "rank": _rx(r"Rank:\s*(?P<rank>[A-Za-z][A-Za-z ]{0,40})"),
                },
            ),
        ),
        derive=derive_spelling_bee,
    ),
    GameGrammar(
        name="minicrossword",
        game_id=_game_id("440005"),
        label="Mini Crossword",
        triggers=(("Mini Crossword",),),
        extractions=(
            Extraction(
                header=_rx(r"Mini\s+Crossword"),
                required={"time": _rx(r"Completed\s+in\s+(?P<time>\d{1,2}(?::\d{2}){1,2})")},
            ),
        ),
        derive=derive_mini_crossword,
    ),
)

_BY_NAME: Dict[str, GameGrammar] = {g.name: g for g in CATALOG}


def get_grammar(name: str) -> Optional[GameGrammar]:
    return _BY_NAME.get((name or "").strip().lower())


def grammar_names() -> Tuple[str, ...]:
    return tuple(g.name for g in CATALOG)
