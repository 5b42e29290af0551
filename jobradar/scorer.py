"""Score relevant postings 0–10 for ranking and triage."""
from __future__ import annotations

from jobradar.criteria import FilterConfig
from jobradar.log import get_logger
from jobradar.models import CandidateRecord, ScoredRecord

log = get_logger(__name__)

MAX_SCORE = 10
KEYWORD_POINTS = 3
JUNIOR_POINTS = 3
PRIMARY_LOCATION_POINTS = 2
SECONDARY_LOCATION_POINTS = 1
TECH_STACK_POINTS = 1
EXPERIENCE_PENALTY = 5


def _score_text(record: CandidateRecord) -> str:
    return f"{record.title or ''} {record.description or ''} {record.company or ''}".lower()


def _breakdown(record: CandidateRecord, config: FilterConfig) -> tuple[int, list[str]]:
    text = _score_text(record)
    score = 0
    reasons: list[str] = []

    if config.keyword_pattern.search(text):
        score += KEYWORD_POINTS
        reasons.append("Keyword match")

    if config.include_pattern.search(text):
        score += JUNIOR_POINTS
        reasons.append("Junior-level signal")

    tier = config.location_tier(record.location)
    if tier == "primary":
        score += PRIMARY_LOCATION_POINTS
        reasons.append("Primary location")
    elif tier == "secondary":
        score += SECONDARY_LOCATION_POINTS
        reasons.append("Secondary location")

    if config.tech_stack_pattern.search(text):
        score += TECH_STACK_POINTS
        reasons.append("Tech stack bonus")

    # No floor: a negative score marks an actively disqualifying posting
    if config.experience_pattern.search(text):
        score -= EXPERIENCE_PENALTY
        reasons.append("Penalty: 3+ years experience")

    return min(score, MAX_SCORE), reasons


def score(record: CandidateRecord, config: FilterConfig) -> int:
    return _breakdown(record, config)[0]


def score_record(record: CandidateRecord, config: FilterConfig) -> ScoredRecord:
    points, reasons = _breakdown(record, config)
    return ScoredRecord(record=record, match_score=points, match_reasons=reasons)
