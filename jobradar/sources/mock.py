"""Mock source for dry runs and tests."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jobradar.log import get_logger
from jobradar.models import CandidateRecord
from jobradar.sources.base import CandidateSource

log = get_logger(__name__)


def _days_ago(days: int) -> str:
    return (datetime.now(timezone.utc) - timedelta(days=days)).strftime("%Y-%m-%d")


class MockSource(CandidateSource):
    name = "mock"

    def __init__(self, settings: dict | None = None) -> None:
        self.settings = settings or {}

    def fetch(self, keywords: list[str], limit: int = 30) -> list[CandidateRecord]:
        log.info("MockSource generating sample postings")
        records = [
            CandidateRecord(
                title="Golang Developer Fresher",
                company="Mekong Tech",
                url="https://example.com/jobs/golang-fresher",
                description="Go backend, REST API, Docker. Training provided.",
                location="Cần Thơ",
                posted_date=_days_ago(3),
                source="mock",
                tech_stack="Go, Docker",
            ),
            CandidateRecord(
                title="Backend Intern (Golang)",
                company="Saigon Cloud",
                url="https://example.com/jobs/golang-intern",
                description="Internship for students, gRPC microservices.",
                location="Ho Chi Minh",
                posted_date="Recent",
                source="mock",
                tech_stack="Go, gRPC",
            ),
            CandidateRecord(
                title="Senior Golang Engineer",
                company="Hanoi Fintech",
                url="https://example.com/jobs/golang-senior",
                description="5+ years building payment systems.",
                location="Hà Nội",
                posted_date=_days_ago(1),
                source="mock",
            ),
        ]
        return records[:limit]
