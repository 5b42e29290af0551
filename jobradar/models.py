"""Data models for candidate postings and scored results."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

# camelCase keys emitted by the browser-side scrapers
_FIELD_ALIASES: dict[str, str] = {
    "postedDate": "posted_date",
    "posted_at": "posted_date",
    "techStack": "tech_stack",
}


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class CandidateRecord:
    title: str
    company: str
    url: str
    description: str = ""
    location: str = ""
    posted_date: str = "N/A"
    source: str = "unknown"
    tech_stack: str = ""
    salary: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CandidateRecord":
        """Build a record from a loosely shaped mapping; absent fields become ""."""
        values: dict[str, str] = {}
        for key, value in data.items():
            name = _FIELD_ALIASES.get(key, key)
            if name in cls.__dataclass_fields__:
                values[name] = _text(value)
        for name in ("title", "company", "url"):
            values.setdefault(name, "")
        if not values.get("posted_date"):
            values["posted_date"] = "N/A"
        if not values.get("source"):
            values["source"] = "unknown"
        return cls(**values)

    def to_dict(self) -> dict[str, str]:
        return {
            "title": self.title,
            "company": self.company,
            "url": self.url,
            "description": self.description,
            "location": self.location,
            "postedDate": self.posted_date,
            "source": self.source,
            "techStack": self.tech_stack,
            "salary": self.salary,
        }


@dataclass(frozen=True)
class ScoredRecord:
    record: CandidateRecord
    match_score: int
    match_reasons: list[str] = field(default_factory=list)

    @property
    def url(self) -> str:
        return self.record.url

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = self.record.to_dict()
        data["matchScore"] = self.match_score
        data["matchReasons"] = list(self.match_reasons)
        return data
