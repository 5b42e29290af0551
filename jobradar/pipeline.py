"""Turn one merged batch of raw candidates into new, relevant, scored jobs.

Runs: relevance filter → score → in-batch dedup by URL → drop previously seen.
The caller persists :func:`included_urls` only after the report was delivered.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Mapping

from jobradar.criteria import FilterConfig
from jobradar.filters import RegexClassifier, RelevanceClassifier
from jobradar.log import get_logger
from jobradar.models import CandidateRecord, ScoredRecord
from jobradar.scorer import score_record

log = get_logger(__name__)


def _as_record(raw: CandidateRecord | Mapping[str, Any]) -> CandidateRecord:
    if isinstance(raw, CandidateRecord):
        return raw
    return CandidateRecord.from_dict(raw)


def process(
    raw_records: Iterable[CandidateRecord | Mapping[str, Any]],
    previously_seen: set[str] | frozenset[str],
    config: FilterConfig,
    *,
    classifier: RelevanceClassifier | None = None,
    now: datetime | None = None,
) -> list[ScoredRecord]:
    """Return the records worth reporting, best score first.

    Previously seen URLs are dropped before classification so a paid
    classifier never sees them; the outcome is the same as dropping them last.
    """
    records = [_as_record(r) for r in raw_records]
    # a record without a url can be neither deduplicated nor remembered
    for r in records:
        if not r.url:
            log.debug("Dropping record without url: %r (%s)", r.title, r.source)
    unseen = [r for r in records if r.url and r.url not in previously_seen]

    verdicts = (classifier or RegexClassifier()).classify(unseen, config, now)
    relevant = [r for r, ok in zip(unseen, verdicts) if ok]

    # Same URL twice in one batch: the later observation replaces the earlier one
    by_url: dict[str, ScoredRecord] = {}
    for record in relevant:
        by_url[record.url] = score_record(record, config)

    result = sorted(by_url.values(), key=lambda s: -s.match_score)
    log.info(
        "Pipeline: %d raw → %d unseen → %d relevant → %d new",
        len(records), len(unseen), len(relevant), len(result),
    )
    return result


def included_urls(scored: Iterable[ScoredRecord]) -> list[str]:
    return [s.url for s in scored]
