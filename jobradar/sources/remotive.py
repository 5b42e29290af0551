"""Remotive — free API for remote tech jobs (no API key required).

Docs: https://remotive.com/api/remote-jobs
"""
from __future__ import annotations

import re

import requests

from jobradar.log import get_logger
from jobradar.models import CandidateRecord
from jobradar.retry import retry
from jobradar.sources.base import CandidateSource

log = get_logger(__name__)

API_URL = "https://remotive.com/api/remote-jobs"

# Level/role words that narrow Remotive's small dataset to nothing
_GENERIC: set[str] = {
    "fresher", "intern", "internship", "junior", "entry", "level", "remote",
    "developer", "engineer", "backend",
}
_TAG = re.compile(r"<[^>]+>")


def _search_terms(keywords: list[str], max_terms: int = 2) -> list[str]:
    """Distinctive words from the configured keywords, e.g. "golang"."""
    terms: list[str] = []
    for kw in keywords:
        for word in kw.lower().split():
            if word not in _GENERIC and word not in terms:
                terms.append(word)
    return terms[:max_terms] or ["golang"]


def _to_record(hit: dict) -> CandidateRecord:
    tags = hit.get("tags") or []
    return CandidateRecord(
        title=hit.get("title") or "",
        company=hit.get("company_name") or "",
        url=hit.get("url") or "",
        description=_TAG.sub(" ", hit.get("description") or ""),
        location=hit.get("candidate_required_location") or "Remote",
        posted_date=hit.get("publication_date") or "N/A",
        source="remotive",
        tech_stack=", ".join(str(t) for t in tags),
        salary=hit.get("salary") or "",
    )


class RemotiveSource(CandidateSource):
    name = "remotive"

    def __init__(self, settings: dict | None = None) -> None:
        self.settings = settings or {}

    @retry(max_attempts=2, base_delay=1.5, retryable=(requests.RequestException, OSError))
    def _fetch(self, search: str, limit: int) -> list[CandidateRecord]:
        r = requests.get(API_URL, params={"search": search, "limit": limit}, timeout=15)
        r.raise_for_status()
        data = r.json()
        return [_to_record(hit) for hit in data.get("jobs", [])]

    def fetch(self, keywords: list[str], limit: int = 30) -> list[CandidateRecord]:
        records: list[CandidateRecord] = []
        seen_urls: set[str] = set()
        for term in _search_terms(keywords):
            try:
                batch = self._fetch(term, limit)
            except Exception as exc:
                log.warning("Remotive search=%r error: %s", term, exc)
                continue
            for rec in batch:
                if rec.url not in seen_urls:
                    seen_urls.add(rec.url)
                    records.append(rec)
            log.debug("Remotive search=%r returned %d jobs", term, len(batch))
        return records[:limit]
