import re
import time

import pytest

from streakshare.parser_engine.catalog import CATALOG, get_grammar
from streakshare.parser_engine.errors import UnparseableShare
from streakshare.parser_engine.grammar import Extraction, clean_text, extract
from streakshare.parser_engine.router import parse_shared_text


def test_clean_text_drops_decorative_glyphs_and_selectors():
    assert clean_text("Pips #1 Easy 🟢\n0:30", "🟢🟡") == "Pips #1 Easy \n0:30"
    assert clean_text("✏️", "") == "✏"
    assert clean_text("", "🟢") == ""


def test_cleaned_variant_is_tried_first():
    captures = extract("Pips #47 Easy 🟢\n1:03", get_grammar("pips"))
    assert captures.variant == "cleaned"
    assert captures.get("difficulty") == "Easy"
    assert captures.puzzle_number == "47"


def test_missing_optional_capture_defaults_to_empty():
    captures = extract("Queens #321", get_grammar("linkedinqueens"))
    assert captures.get("time") == ""
    assert captures.get("not-a-field", "fallback") == "fallback"


def test_extraction_label_is_reported():
    captures = extract("Pinpoint #9 (2/5) 📌", get_grammar("linkedinpinpoint"))
    assert captures.label == "emoji_based"


def test_required_field_must_follow_header():
    grammar = get_grammar("minicrossword")
    with pytest.raises(UnparseableShare) as excinfo:
        extract("Completed in 1:00 Mini Crossword", grammar)
    assert excinfo.value.reason == "Couldn't parse Mini Crossword result"
    assert excinfo.value.grammar is grammar


def test_extraction_defaults():
    extraction = Extraction(header=re.compile("x"))
    assert dict(extraction.required) == {}
    assert dict(extraction.optional) == {}


@pytest.mark.parametrize(
    "text,game",
    [
        ("Wordle", "Wordle"),
        ("Wordle 1492 7/6", "Wordle"),
        ("Connections Puzzle #", "Connections"),
        ("Strands #", "Strands"),
        ("Pips #4 Extreme 1:00", "Pips"),
        ("Spelling Bee\nScore: 10\nRank: Genius", "Spelling Bee"),
        ("Mini Sudoku #", "LinkedIn Mini Sudoku"),
    ],
)
def test_trigger_only_inputs_are_unparseable(text, game):
    outcome = parse_shared_text(text)
    assert outcome.status == "unparseable"
    assert outcome.message == f"Couldn't parse {game} result"
    assert outcome.result is None


TRIGGER_TEXTS = [" ".join(trigger) for grammar in CATALOG for trigger in grammar.triggers]


@pytest.mark.parametrize("text", TRIGGER_TEXTS)
def test_bare_trigger_never_assembles(text):
    outcome = parse_shared_text(text)
    assert outcome.status != "assembled"
    assert outcome.result is None


@pytest.mark.parametrize("text", TRIGGER_TEXTS)
def test_whitespace_run_after_trigger_terminates(text):
    started = time.monotonic()
    outcome = parse_shared_text(text + " " * 50000 + "x")
    assert outcome.status != "assembled"
    assert time.monotonic() - started < 5


@pytest.mark.parametrize(
    "text",
    [
        "Wordle " * 20000,
        "Wordle 1" + "," * 50000,
        "Wordle " + "1," * 30000 + " 3/6",
        "Pinpoint #1 " + "(" * 50000,
        "Zip #1 " + "9" * 50000,
        "Spelling Bee " + "Rank: " * 20000,
        "Connections Puzzle #" + "🟩" * 50000,
        "🟥" * 100000,
        "\ufe0f\u20e3" * 50000,
        "\ud800" * 1000,
        "Wordle 1 3/6 \udfff",
        "Daily Quordle" + " " * 50000,
        "Daily Octordle" + " " * 50000,
        "Daily Quordle" + " \t\n" * 20000 + "#",
        "Pips #1" + " " * 50000 + "Easy",
    ],
)
def test_pathological_inputs_terminate(text):
    started = time.monotonic()
    outcome = parse_shared_text(text)
    assert outcome.status in ("assembled", "unrecognized", "unparseable")
    assert time.monotonic() - started < 5
