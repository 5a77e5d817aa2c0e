import pytest

from streakshare.parser_engine.derivers import (
    derive_connections,
    derive_octordle,
    derive_quordle,
    parse_clock,
    parse_count,
    timed,
)
from streakshare.parser_engine.grammar import Captures
from streakshare.parser_engine.symbols import decode_lines


def captures(text="", **groups):
    return Captures(groups=groups, text=text, variant="cleaned")


@pytest.mark.parametrize(
    "value,seconds",
    [
        ("1:10", 70),
        ("0:05", 5),
        ("12:00", 720),
        ("1:02:03", 3723),
        ("", 0),
        ("abc", 0),
        ("1:75", 0),
        ("1:2:3:4", 0),
        ("10", 0),
    ],
)
def test_parse_clock(value, seconds):
    assert parse_clock(value) == seconds


def test_parse_count_defaults():
    assert parse_count("12") == 12
    assert parse_count("") == 0
    assert parse_count("x", default=5) == 5


def test_unexpected_symbols_are_ignored():
    text = "🎉🟥🦄\n???\n🟩🟩🟩🟩"
    lines = decode_lines(text)

    assert derive_connections(captures(text, puzzle="1"), lines).score == 1
    assert derive_quordle(captures(text, puzzle="1"), lines).completed is False
    assert derive_octordle(captures(text, puzzle="1"), lines).fields["failedWords"] == "1"


def test_quordle_short_grid_skips_board_fields():
    derived = derive_quordle(captures(puzzle="5"), decode_lines("no grid here"))
    assert derived.score is None
    assert derived.completed is False
    assert "score1" not in derived.fields


def test_timed_rule_names_game_type():
    rule = timed("logic_puzzle")
    derived = rule(captures(time="0:59", puzzle="7"), [])
    assert derived.score == 59
    assert derived.max_attempts == 0
    assert derived.fields == {
        "puzzleNumber": "7",
        "time": "0:59",
        "gameType": "logic_puzzle",
        "displayScore": "0:59",
    }


def test_malformed_time_keeps_raw_string():
    derived = timed("logic_puzzle")(captures(time="9:99", puzzle="7"), [])
    assert derived.score == 0
    assert derived.fields["time"] == "9:99"
