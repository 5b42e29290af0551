"""Relevance gate: is a candidate a genuine, in-scope junior Go posting?"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Sequence

from jobradar.criteria import FilterConfig
from jobradar.log import get_logger
from jobradar.models import CandidateRecord
from jobradar.recency import is_recent

log = get_logger(__name__)

_HIRING = re.compile(
    r"#hiring\b|\b(is hiring|we're hiring|we are hiring|now hiring|job opening|open position"
    r"|hiring for|recruiting|apply now|remote job|looking for|we need|developer needed"
    r"|tuyển dụng|đang tuyển)\b"
)
_PERSONAL = re.compile(r"\b(i need|i'm looking|i am looking|i want|my job|just asking)\b")


def _filter_text(record: CandidateRecord) -> str:
    return f"{record.title or ''} {record.description or ''}".lower()


def rejection_reason(
    record: CandidateRecord,
    config: FilterConfig,
    now: datetime | None = None,
) -> str | None:
    """Return why *record* is rejected, or None when it passes.

    Checks run in a fixed order and the first failing one wins.
    """
    text = _filter_text(record)
    if not config.keyword_pattern.search(text):
        return "missing keyword"
    if config.exclude_pattern.search(text):
        return "seniority excluded"
    if config.experience_pattern.search(text):
        return "3+ years experience"
    if not is_recent(record.posted_date, config, now):
        return "stale posting"
    return None


def should_include(
    record: CandidateRecord,
    config: FilterConfig,
    now: datetime | None = None,
) -> bool:
    reason = rejection_reason(record, config, now)
    if reason:
        log.debug("Rejected %s (%s): %s", record.url, record.source, reason)
        return False
    return True


def looks_like_hiring_post(text: str) -> bool:
    """Heuristic for social posts: an employer announcing an opening, not a job seeker."""
    low = (text or "").lower()
    return _HIRING.search(low) is not None and _PERSONAL.search(low) is None


class RelevanceClassifier(ABC):
    """Batch form of the relevance gate, so alternative strategies can replace it."""

    @abstractmethod
    def classify(
        self,
        records: Sequence[CandidateRecord],
        config: FilterConfig,
        now: datetime | None = None,
    ) -> list[bool]:
        pass


class RegexClassifier(RelevanceClassifier):
    def classify(
        self,
        records: Sequence[CandidateRecord],
        config: FilterConfig,
        now: datetime | None = None,
    ) -> list[bool]:
        return [should_include(r, config, now) for r in records]
