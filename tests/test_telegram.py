import logging
from unittest.mock import MagicMock, patch

import pytest
import requests

from jobradar.models import CandidateRecord, ScoredRecord
from jobradar.telegram import TelegramReporter, escape_link_target, escape_markdown, format_job_card


def _response(status: int = 200, payload: dict | None = None) -> MagicMock:
    r = MagicMock()
    r.status_code = status
    r.ok = 200 <= status < 300
    r.json.return_value = payload or {"ok": r.ok}
    r.text = str(payload)
    return r


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    delays = []
    monkeypatch.setattr("jobradar.retry.time.sleep", delays.append)
    return delays


@pytest.fixture
def scored():
    rec = CandidateRecord(
        title="Golang Intern",
        company="Gopher_Shop",
        url="https://example.com/jobs/1",
        location="Cần Thơ",
        posted_date="2025-01-20",
        source="topcv",
        tech_stack="Go, Docker",
    )
    return ScoredRecord(record=rec, match_score=8, match_reasons=[])


@pytest.fixture
def reporter():
    return TelegramReporter(token="SECRET", chat_id="42")


def test_escape_markdown():
    assert escape_markdown("a_b.c!(x)") == "a\\_b\\.c\\!\\(x\\)"


def test_job_card_contents(scored):
    card = format_job_card(scored)
    assert "*Gopher\\_Shop*" in card
    assert "[View Job](https://example.com/jobs/1)" in card
    assert "Match Score: 8/10" in card
    assert "2025\\-01\\-20" in card
    assert "💰" not in card


def test_link_target_escapes_paren_and_backslash():
    assert escape_link_target("https://x.io/a_(b)\\c") == "https://x.io/a_(b\\)\\\\c"


def test_job_card_link_with_parenthesis():
    job = CandidateRecord(title="Golang Intern", company="Acme", url="https://x.io/jobs/go_(intern)")
    card = format_job_card(ScoredRecord(record=job, match_score=6, match_reasons=[]))
    assert "[View Job](https://x.io/jobs/go_(intern\\))" in card


def test_send_job_report(reporter, scored):
    with patch("jobradar.telegram.requests.post", return_value=_response()) as post:
        assert reporter.send_job_report(scored) is True
    url = post.call_args.args[0]
    payload = post.call_args.kwargs["json"]
    assert url == "https://api.telegram.org/botSECRET/sendMessage"
    assert payload["chat_id"] == "42"
    assert payload["parse_mode"] == "MarkdownV2"


def test_disabled_without_credentials(scored):
    quiet = TelegramReporter(token="", chat_id="")
    with patch("jobradar.telegram.requests.post") as post:
        assert quiet.send_job_report(scored) is False
        assert quiet.send_status("hello") is False
    post.assert_not_called()


def test_http_error_reported_as_failure(reporter, scored):
    with patch("jobradar.telegram.requests.post", return_value=_response(400, {"description": "bad"})) as post:
        assert reporter.send_job_report(scored) is False
    assert post.call_count == 1


def test_rate_limit_waits_and_retries(reporter, no_sleep):
    responses = [_response(429, {"parameters": {"retry_after": 3}}), _response()]
    with patch("jobradar.telegram.requests.post", side_effect=responses) as post:
        assert reporter.send_status("done") is True
    assert post.call_count == 2
    assert no_sleep == [3.0]


def test_network_errors_retried_then_fail_without_leaking_token(reporter, caplog):
    err = requests.ConnectionError("Max retries exceeded with url: /botSECRET/sendMessage")
    with caplog.at_level(logging.WARNING):
        with patch("jobradar.telegram.requests.post", side_effect=err) as post:
            assert reporter.send_error("boom") is False
    assert post.call_count == 3
    assert "SECRET" not in caplog.text
    assert "/bot***/sendMessage" in caplog.text
