"""
Per-game score / completion rules.

Each rule is a pure function (captures, symbol_lines) -> Derived. Symbols a
rule does not expect are skipped; a field that does not have the expected
shape falls back to a safe default instead of failing the share.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from .contract import Derived
from .grammar import Captures
from .symbols import ColorTag, DecodedGlyph, Digit, Failure

SymbolLines = List[List[DecodedGlyph]]
DeriveFn = Callable[[Captures, SymbolLines], Derived]

CONNECTIONS_PALETTE = {"yellow", "green", "blue", "purple"}
CONNECTIONS_CATEGORIES = 4

QUORDLE_BOARDS = 4
OCTORDLE_BOARDS = 8
# Octordle counts an unsolved word as 13 when the score is rebuilt from the grid
OCTORDLE_FAILURE_PENALTY = 13

PIPS_DIFFICULTY = {"easy": 1, "medium": 2, "hard": 3}
SPELLING_BEE_COMPLETED_RANKS = ("genius", "queen bee", "amazing")

HINT_GLYPH = "💡"
PIN_GLYPH = "📌"


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def puzzle_fields(captures: Captures) -> Dict[str, str]:
    puzzle = captures.puzzle_number
    return {"puzzleNumber": puzzle} if puzzle else {}


def parse_clock(value: str) -> int:
    """
    Convert "M:SS" or "H:MM:SS" into seconds.

    Anything that does not have that shape counts as 0 seconds.
    """
    if not value:
        return 0

    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        logging.debug("[MALFORMED FIELD] time %r", value)
        return 0

    numbers = [int(p) for p in parts]
    if any(n >= 60 for n in numbers[1:]):
        logging.debug("[MALFORMED FIELD] time %r out of range", value)
        return 0

    total = 0
    for n in numbers:
        total = total * 60 + n
    return total


def parse_count(value: str, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        if value:
            logging.debug("[MALFORMED FIELD] count %r", value)
        return default


def _values(symbol_lines: SymbolLines):
    for line in symbol_lines:
        for decoded in line:
            if decoded.value is not None:
                yield decoded.value


# ---------------------------------------------------------------------------
# Attempt-count games
# ---------------------------------------------------------------------------

def derive_guess_count(captures: Captures, symbol_lines: SymbolLines) -> Derived:
    """Wordle / Nerdle: "3/6" solved in three, "X/6" failed."""
    token = captures.get("guesses").upper()
    completed = token != "X"
    score = parse_count(token) if completed else None

    fields = puzzle_fields(captures)
    if captures.get("hard"):
        fields["hardMode"] = "true"

    return Derived(score=score, max_attempts=6, completed=completed, fields=fields)


def derive_quordle(captures: Captures, symbol_lines: SymbolLines) -> Derived:
    boards: List[int] = []
    for value in _values(symbol_lines):
        if isinstance(value, Failure):
            boards.append(-1)
        elif isinstance(value, Digit):
            boards.append(value.value)
        if len(boards) == QUORDLE_BOARDS:
            break

    solved = [b for b in boards if b > 0]
    failed = sum(1 for b in boards if b == -1)

    score: Optional[int] = None
    if failed == 0 and solved:
        score = sum(solved) // len(solved)

    fields = puzzle_fields(captures)
    if len(boards) == QUORDLE_BOARDS:
        for index, board in enumerate(boards, start=1):
            fields[f"score{index}"] = str(board) if board > 0 else "failed"
        fields["completedPuzzles"] = str(len(solved))
        fields["failedPuzzles"] = str(failed)

    return Derived(
        score=score,
        max_attempts=9,
        completed=failed == 0 and len(solved) == QUORDLE_BOARDS,
        fields=fields,
    )


# ---------------------------------------------------------------------------
# Category matching
# ---------------------------------------------------------------------------

def _connections_row(line: List[DecodedGlyph]) -> bool:
    if len(line) != CONNECTIONS_CATEGORIES:
        return False
    return all(
        isinstance(d.value, ColorTag) and d.value.label in CONNECTIONS_PALETTE
        for d in line
    )


def derive_connections(captures: Captures, symbol_lines: SymbolLines) -> Derived:
    rows = [line for line in symbol_lines if _connections_row(line)]

    solved = 0
    strikes = 0
    for row in rows:
        if len({d.value for d in row}) == 1:
            solved += 1
        else:
            strikes += 1

    fields = puzzle_fields(captures)
    fields.update({
        "totalGuesses": str(len(rows)),
        "solvedCategories": str(solved),
        "strikes": str(strikes),
        "emojiGrid": " ".join("".join(d.glyph for d in row) for row in rows),
    })

    return Derived(
        score=solved,
        max_attempts=CONNECTIONS_CATEGORIES,
        completed=solved == CONNECTIONS_CATEGORIES,
        fields=fields,
    )


# ---------------------------------------------------------------------------
# Hint-based
# ---------------------------------------------------------------------------

def derive_strands(captures: Captures, symbol_lines: SymbolLines) -> Derived:
    hints = captures.text.count(HINT_GLYPH)

    fields = puzzle_fields(captures)
    fields.update({
        "hintCount": str(hints),
        "theme": captures.get("theme").strip(),
        "gameType": "word_puzzle",
        "displayScore": "Perfect" if hints == 0 else f"{hints} hints",
    })

    # No failure state: a recognised header means the puzzle was finished
    return Derived(score=hints, max_attempts=10, completed=True, fields=fields)


# ---------------------------------------------------------------------------
# Timed logic games
# ---------------------------------------------------------------------------

def timed(game_type: str, with_backtracks: bool = False) -> DeriveFn:
    """Build the rule shared by Queens, Tango, Crossclimb and Zip."""

    def derive(captures: Captures, symbol_lines: SymbolLines) -> Derived:
        time_string = captures.get("time")

        fields = puzzle_fields(captures)
        fields["time"] = time_string
        max_attempts = 0
        if with_backtracks:
            backtracks = parse_count(captures.get("backtracks"))
            fields["backtrackCount"] = str(backtracks)
            max_attempts = backtracks
        fields["gameType"] = game_type
        fields["displayScore"] = time_string or "Completed"

        return Derived(
            score=parse_clock(time_string),
            max_attempts=max_attempts,
            completed=True,
            fields=fields,
        )

    derive.__name__ = f"derive_timed_{game_type}"
    return derive


def derive_pinpoint(captures: Captures, symbol_lines: SymbolLines) -> Derived:
    fields = puzzle_fields(captures)

    if captures.label == "emoji_based":
        guesses = parse_count(captures.get("guesses"))
        fields.update({
            "guessCount": str(guesses),
            "gameType": "word_association",
            "displayScore": f"{guesses} guesses",
            "shareFormat": "emoji_based",
        })
        return Derived(
            score=guesses,
            max_attempts=parse_count(captures.get("max"), default=5),
            completed=PIN_GLYPH in captures.text,
            fields=fields,
        )

    guesses = parse_count(captures.get("guesses") or captures.get("later"))
    if guesses == 0:
        # One keycap line per guess
        guesses = sum(
            1 for line in symbol_lines
            if any(isinstance(d.value, Digit) for d in line)
        )

    fields.update({
        "guessCount": str(guesses),
        "gameType": "word_association",
        "displayScore": f"{guesses} guesses" if guesses > 0 else "Completed",
        "shareFormat": "original",
    })
    return Derived(
        score=guesses if guesses > 0 else 1,
        max_attempts=5,
        completed="100% match" in captures.text or PIN_GLYPH in captures.text,
        fields=fields,
    )


def derive_mini_sudoku(captures: Captures, symbol_lines: SymbolLines) -> Derived:
    fields = puzzle_fields(captures)
    if captures.get("time"):
        fields["time"] = captures.get("time")
    fields["gameType"] = "sudoku"
    return Derived(score=1, max_attempts=1, completed=True, fields=fields)


def derive_pips(captures: Captures, symbol_lines: SymbolLines) -> Derived:
    difficulty = captures.get("difficulty")
    time_string = captures.get("time")

    fields = puzzle_fields(captures)
    fields.update({
        "difficulty": difficulty,
        "time": time_string,
        "totalSeconds": str(parse_clock(time_string)),
    })

    return Derived(
        score=PIPS_DIFFICULTY.get(difficulty.lower(), 1),
        max_attempts=3,
        completed=True,
        fields=fields,
    )


# ---------------------------------------------------------------------------
# Summed multi-word
# ---------------------------------------------------------------------------

def derive_octordle(captures: Captures, symbol_lines: SymbolLines) -> Derived:
    solved_words = 0
    failed_words = 0
    grid_total = 0
    for value in _values(symbol_lines):
        if isinstance(value, Failure):
            failed_words += 1
            grid_total += OCTORDLE_FAILURE_PENALTY
        elif isinstance(value, Digit) and value.value > 0:
            solved_words += 1
            grid_total += value.value

    total = captures.get("total")
    score = parse_count(total, default=grid_total) if total else grid_total
    has_failed = failed_words > 0

    fields = puzzle_fields(captures)
    fields.update({
        "totalScore": str(score),
        "completedWords": str(solved_words),
        "failedWords": str(failed_words),
        "completionRate": f"{solved_words}/{OCTORDLE_BOARDS}",
        "hasFailedWords": "true" if has_failed else "false",
        "gameType": "word_variant",
    })

    # attempts are not meaningful for Octordle, the score doubles as the bound
    return Derived(score=score, max_attempts=score, completed=not has_failed, fields=fields)


# ---------------------------------------------------------------------------
# Other NYT games
# ---------------------------------------------------------------------------

def derive_spelling_bee(captures: Captures, symbol_lines: SymbolLines) -> Derived:
    rank = captures.get("rank").strip()
    lowered = rank.lower()

    return Derived(
        score=parse_count(captures.get("score")),
        max_attempts=1000,
        completed=any(r in lowered for r in SPELLING_BEE_COMPLETED_RANKS),
        fields={
            "score": captures.get("score"),
            "wordsFound": captures.get("words"),
            "rank": rank,
        },
    )


def derive_mini_crossword(captures: Captures, symbol_lines: SymbolLines) -> Derived:
    time_string = captures.get("time")
    seconds = parse_clock(time_string)
    return Derived(
        score=seconds,
        max_attempts=600,
        completed=True,
        fields={"completionTime": time_string, "totalSeconds": str(seconds)},
    )
