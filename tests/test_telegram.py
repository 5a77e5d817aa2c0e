import requests

from streakshare.parser_engine.router import parse_shared_text
from streakshare.services import telegram
from streakshare.telegram.ux import build_reply_for_outcome


class _FakeResponse:
    def __init__(self, status_code=200, text="{}"):
        self.status_code = status_code
        self.text = text


def test_send_message_posts_markdown(monkeypatch):
    calls = []

    def fake_post(url, json=None, timeout=None):
        calls.append((url, json))
        return _FakeResponse()

    monkeypatch.setattr(telegram.requests, "post", fake_post)
    assert telegram.send_message(5, "hi") == (True, None)

    url, payload = calls[0]
    assert url.endswith("/sendMessage")
    assert payload == {"chat_id": 5, "text": "hi", "parse_mode": "Markdown"}


def test_send_message_reports_errors(monkeypatch):
    def refuse(*args, **kwargs):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(telegram.requests, "post", refuse)
    ok, error = telegram.send_message(5, "hi")
    assert ok is False
    assert "down" in error

    monkeypatch.setattr(telegram.requests, "post", lambda *a, **k: _FakeResponse(403, "forbidden"))
    assert telegram.send_message(5, "hi") == (False, "HTTP 403")


def test_reply_uses_display_score():
    outcome = parse_shared_text("Strands #310\n“Lend me a hand”\n💡🔵🔵🔵")
    text, markup = build_reply_for_outcome(outcome)
    assert markup is None
    assert "Strands result saved!" in text
    assert "1 hints" in text


def test_reply_for_failed_wordle_and_hard_mode():
    text, _ = build_reply_for_outcome(parse_shared_text("Wordle 1492 X/6"))
    assert "Result: failed" in text
    assert "Not completed" in text

    text, _ = build_reply_for_outcome(parse_shared_text("Wordle 1492 2/6*"))
    assert "Hard mode" in text


def test_reply_for_unknown_game_points_to_games_command():
    text, _ = build_reply_for_outcome(parse_shared_text("hello"))
    assert "Unknown game format" in text
    assert "/games" in text
