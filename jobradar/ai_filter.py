"""LLM relevance check for low-structure social posts (Groq, OpenAI-compatible API).

Structured job-board records always go through the regex filter. Posts from
free-text sources are sent to the model in one batch; any post the model does
not answer for, or every post when the call fails, falls back to regex rules.
"""
from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Sequence

from jobradar.config import get_env
from jobradar.criteria import FilterConfig
from jobradar.filters import RegexClassifier, RelevanceClassifier, looks_like_hiring_post
from jobradar.log import get_logger
from jobradar.models import CandidateRecord
from jobradar.recency import is_recent
from jobradar.retry import retry

log = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.3-70b-versatile"

_JSON_ARRAY = re.compile(r"\[.*\]", re.DOTALL)


@retry(max_attempts=2, base_delay=2.0, retryable=(Exception,))
def _call_llm(api_key: str, base_url: str, model: str, prompt: str) -> str:
    from openai import OpenAI

    client = OpenAI(api_key=api_key, base_url=base_url)
    r = client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": prompt}],
        max_tokens=1500,
        temperature=0,
    )
    return (r.choices[0].message.content or "").strip()


def build_prompt(records: Sequence[CandidateRecord]) -> str:
    lines = [
        f"[{i}] {r.source}: {r.title[:60]} | {(r.description or 'N/A')[:160]}"
        for i, r in enumerate(records)
    ]
    return (
        f"Analyze these {len(records)} social media posts. Decide for each whether it is a REAL "
        "JOB POSTING (a company hiring a fresher, intern or junior Golang/Go developer) or NOT "
        "(job seekers, opinions, senior roles, unrelated chatter).\n\n"
        + "\n".join(lines)
        + '\n\nRespond with a JSON array ONLY, one object per post:\n'
        '[{"id": 0, "isValid": true, "reason": "golang intern hiring"}]'
    )


def parse_verdicts(text: str, count: int) -> dict[int, bool]:
    """Extract ``{index: is_valid}`` from the model reply; ignores malformed items."""
    m = _JSON_ARRAY.search(text or "")
    if not m:
        return {}
    try:
        items = json.loads(m.group(0))
    except ValueError:
        log.warning("AI reply was not valid JSON")
        return {}
    verdicts: dict[int, bool] = {}
    for item in items if isinstance(items, list) else []:
        if not isinstance(item, dict):
            continue
        try:
            idx = int(item.get("id"))
        except (TypeError, ValueError):
            continue
        if 0 <= idx < count:
            verdicts[idx] = item.get("isValid") is True
    return verdicts


def is_free_text(record: CandidateRecord, config: FilterConfig) -> bool:
    source = (record.source or "").lower()
    return any(tag in source for tag in config.free_text_sources)


class AIRelevanceClassifier(RelevanceClassifier):
    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self._regex = RegexClassifier()

    def _regex_fallback(
        self,
        records: Sequence[CandidateRecord],
        config: FilterConfig,
        now: datetime | None,
    ) -> list[bool]:
        verdicts = self._regex.classify(records, config, now)
        for i, record in enumerate(records):
            if verdicts[i] and is_free_text(record, config):
                verdicts[i] = looks_like_hiring_post(f"{record.title} {record.description}")
        return verdicts

    def classify(
        self,
        records: Sequence[CandidateRecord],
        config: FilterConfig,
        now: datetime | None = None,
    ) -> list[bool]:
        verdicts = self._regex_fallback(records, config, now)
        free = [i for i, r in enumerate(records) if is_free_text(r, config)]
        if not free:
            return verdicts

        posts = [records[i] for i in free]
        log.info("AI validation: sending %d social post(s) to %s", len(posts), self.model)
        try:
            reply = _call_llm(self.api_key, self.base_url, self.model, build_prompt(posts))
        except Exception as exc:
            log.warning("AI validation failed (%s), using regex fallback", str(exc)[:120])
            return verdicts

        answered = parse_verdicts(reply, len(posts))
        for local_idx, ok in answered.items():
            record = posts[local_idx]
            # the model cannot judge the posting date
            verdicts[free[local_idx]] = ok and is_recent(record.posted_date, config, now)
        log.info(
            "AI validation: %d/%d answered by model, %d valid overall",
            len(answered), len(posts), sum(verdicts),
        )
        return verdicts


def build_classifier(use_ai: bool = True) -> RelevanceClassifier:
    """AI classifier when enabled and GROQ_API_KEY is set; regex rules otherwise."""
    api_key = get_env("GROQ_API_KEY")
    if not use_ai:
        log.info("AI validation disabled; using regex rules")
        return RegexClassifier()
    if not api_key:
        log.info("No GROQ_API_KEY; using regex rules")
        return RegexClassifier()
    return AIRelevanceClassifier(
        api_key,
        model=get_env("GROQ_LLM_MODEL", DEFAULT_MODEL) or DEFAULT_MODEL,
        base_url=get_env("AI_BASE_URL", DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
    )
