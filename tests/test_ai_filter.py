from unittest.mock import patch

import pytest

from jobradar.ai_filter import (
    AIRelevanceClassifier,
    build_classifier,
    build_prompt,
    parse_verdicts,
)
from jobradar.filters import RegexClassifier


@pytest.fixture
def classifier():
    return AIRelevanceClassifier("test-key", model="test-model")


@pytest.fixture
def tweet(make_record):
    def _make(**overrides):
        fields = {
            "title": "We're hiring a Golang intern!",
            "description": "We're hiring a Golang intern! DM us.",
            "company": "gopher_shop",
            "url": "https://x.com/gopher_shop/status/1",
            "source": "X (Twitter)",
        }
        fields.update(overrides)
        return make_record(**fields)

    return _make


def test_structured_sources_skip_the_model(classifier, config, make_record, now):
    with patch("jobradar.ai_filter._call_llm") as call:
        verdicts = classifier.classify([make_record()], config, now)
    call.assert_not_called()
    assert verdicts == [True]


def test_model_verdict_overrides_regex(classifier, config, tweet, now):
    with patch("jobradar.ai_filter._call_llm", return_value='[{"id": 0, "isValid": false}]'):
        assert classifier.classify([tweet()], config, now) == [False]


def test_model_can_accept_post_regex_would_reject(classifier, config, tweet, now):
    post = tweet(title="Startup needs a gopher", description="Entry level backend role, apply now")
    assert RegexClassifier().classify([post], config, now) == [False]
    with patch("jobradar.ai_filter._call_llm", return_value='[{"id": 0, "isValid": true}]'):
        assert classifier.classify([post], config, now) == [True]


def test_model_accept_still_requires_recent_date(classifier, config, tweet, now):
    with patch("jobradar.ai_filter._call_llm", return_value='[{"id": 0, "isValid": true}]'):
        assert classifier.classify([tweet(posted_date="2019-01-01")], config, now) == [False]


def test_failure_falls_back_to_regex_rules(classifier, config, tweet, now):
    seeker = tweet(
        url="https://x.com/someone/status/2",
        title="I'm looking for a golang job",
        description="I'm looking for a golang job, any leads?",
    )
    with patch("jobradar.ai_filter._call_llm", side_effect=RuntimeError("429 RATE_LIMIT")):
        assert classifier.classify([tweet(), seeker], config, now) == [True, False]


def test_unanswered_posts_use_fallback(classifier, config, tweet, make_record, now):
    records = [make_record(url="board"), tweet(), tweet(url="https://x.com/b/status/3")]
    reply = 'Sure! [{"id": 1, "isValid": false}]'
    with patch("jobradar.ai_filter._call_llm", return_value=reply) as call:
        verdicts = classifier.classify(records, config, now)
    # only the two social posts are sent, indexed 0 and 1
    prompt = call.call_args.args[3]
    assert "[0] X (Twitter)" in prompt and "[1] X (Twitter)" in prompt
    assert "[2]" not in prompt
    assert verdicts == [True, True, False]


def test_parse_verdicts_tolerates_noise():
    text = 'Here you go:\n[{"id": 0, "isValid": true}, {"id": "1", "isValid": "yes"}, {"id": 9, "isValid": true}, "x"]'
    assert parse_verdicts(text, 2) == {0: True, 1: False}


@pytest.mark.parametrize("text", ["", "no json here", "[not valid json]", '{"id": 0}'])
def test_parse_verdicts_without_array(text):
    assert parse_verdicts(text, 3) == {}


def test_build_prompt_lists_every_post(tweet):
    prompt = build_prompt([tweet(), tweet()])
    assert "Analyze these 2 social media posts" in prompt
    assert "[1] X (Twitter): We're hiring a Golang intern!" in prompt


def test_build_classifier_without_key(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    assert isinstance(build_classifier(use_ai=True), RegexClassifier)


def test_build_classifier_with_key(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "k")
    monkeypatch.setenv("GROQ_LLM_MODEL", "custom-model")
    c = build_classifier(use_ai=True)
    assert isinstance(c, AIRelevanceClassifier)
    assert c.model == "custom-model"


def test_build_classifier_disabled(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "k")
    assert isinstance(build_classifier(use_ai=False), RegexClassifier)
