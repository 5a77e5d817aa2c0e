from datetime import datetime

import pytz

from streakshare.parser_engine.assembler import assemble
from streakshare.parser_engine.catalog import get_grammar
from streakshare.parser_engine.contract import Derived, ParseOutcome, record_summary
from streakshare.parser_engine.router import parse_shared_text, parse_text_message
from streakshare.parser_engine.validator import validate_record

FIXED = pytz.UTC.localize(datetime(2025, 3, 1, 12, 0, 0))


def test_assemble_copies_text_and_tags_source():
    derived = Derived(score=70, max_attempts=0, completed=True,
                      fields={"time": "1:10", "puzzleNumber": "362", "source": "manual"})
    text = "  Tango #362\n1:10 🌗  "
    result = assemble(get_grammar("linkedintango"), derived, text, timestamp=FIXED)

    assert result.shared_text == text
    assert list(result.parsed_data) == ["puzzleNumber", "time", "source"]
    assert result.parsed_data["source"] == "shareExtension"
    assert result.to_dict()["date"] == "2025-03-01T12:00:00Z"


def test_assemble_generates_fresh_ids():
    derived = Derived(score=1, max_attempts=1, completed=True)
    grammar = get_grammar("linkedinminisudoku")
    first = assemble(grammar, derived, "x", timestamp=FIXED)
    second = assemble(grammar, derived, "x", timestamp=FIXED)
    assert first.id != second.id


def test_parse_is_idempotent_apart_from_id():
    text = "Connections\nPuzzle #575\n🟨🟨🟨🟨\n🟩🟩🟩🟩\n🟦🟦🟪🟦\n🟦🟦🟦🟦"
    first = parse_shared_text(text, timestamp=FIXED).result.to_dict()
    second = parse_shared_text(text, timestamp=FIXED).result.to_dict()

    first.pop("id")
    second.pop("id")
    assert first == second


def test_assembled_records_match_schema():
    record = parse_shared_text("Wordle 1492 X/6").result.to_dict()
    assert validate_record(record) == (True, "")


def test_schema_rejects_missing_source():
    record = parse_shared_text("Wordle 1492 3/6").result.to_dict()
    del record["parsedData"]["source"]
    ok, err = validate_record(record)
    assert ok is False
    assert "source" in err


def test_outcome_messages():
    ok = parse_shared_text("Wordle 1492 3/6")
    assert ok.status == "assembled"
    assert ok.message == "Wordle result saved!"
    assert ok.game == "wordle"

    unknown = parse_shared_text("hello")
    assert unknown.status == "unrecognized"
    assert unknown.message == "Unknown game format"
    assert unknown.game is None


def test_failed_outcome_never_carries_result():
    result = parse_shared_text("Wordle 1492 3/6").result
    outcome = ParseOutcome(status="unparseable", message="nope", result=result)
    assert outcome.result is None
    assert outcome.ok is False
    assert outcome.issues


def test_invalid_status_is_coerced():
    outcome = ParseOutcome(status="weird", message="?")
    assert outcome.status == "unrecognized"


def test_parse_text_message_returns_plain_dict():
    parsed = parse_text_message("Tango #362\n1:10 🌗\nlnkd.in/tango.")
    assert parsed["status"] == "assembled"
    assert parsed["game"] == "linkedintango"
    assert parsed["result"]["score"] == 70
    assert parsed["issues"] == []


def test_record_summary():
    record = parse_shared_text("Wordle 1,492 3/6").result.to_dict()
    assert record_summary(record) == "wordle #1492: score=3 (completed)"
