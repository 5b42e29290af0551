"""Filter configuration: patterns, locations and recency limits.

A single :class:`FilterConfig` is built once at start-up (``FilterConfig.from_settings``)
and handed to the recency classifier, the relevance filter and the scorer.
All patterns are matched against lower-cased text.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from jobradar.log import get_logger

log = get_logger(__name__)

# Units for an experience expression, English and Vietnamese ("năm" = year)
_YEARS_UNIT = r"(?:years?|yrs?|yoe|năm|nam)"

KEYWORD_PATTERN = r"\b(golang|go\s+(?:developer|backend|engineer|programmer|programming))\b"

EXCLUDE_PATTERN = (
    r"\b(senior|lead|manager|principal|staff|architect|trưởng nhóm"
    rf"|(?:\d{{2,}}|[3-9])\s*(?:\+|plus)?\s*{_YEARS_UNIT}"
    rf"|2\s*(?:\+|plus)\s*{_YEARS_UNIT})\b"
)

INCLUDE_PATTERN = (
    r"\b(fresher|intern|internship|junior|entry[\s-]?level|graduate|trainee"
    r"|thực tập|mới tốt nghiệp)\b"
)

EXPERIENCE_PATTERN = rf"\b(?:[3-9]|\d{{2,}})\s*(?:\+|plus)?\s*{_YEARS_UNIT}\b"

TECH_STACK_PATTERN = (
    r"\b(docker|kubernetes|k8s|aws|gcp|azure|microservices?|rest\s*api|grpc"
    r"|backend|back-end)\b"
)

PRIMARY_LOCATIONS: tuple[str, ...] = ("cần thơ", "can tho")
SECONDARY_LOCATIONS: tuple[str, ...] = (
    "ho chi minh", "hồ chí minh", "hcm", "hanoi", "hà nội", "worldwide", "global",
)
REMOTE_LOCATIONS: tuple[str, ...] = ("remote", "từ xa")
REMOTE_POLICIES: tuple[str, ...] = ("primary", "secondary", "ignore")

# Sources whose posts are unstructured social text (candidates for AI classification)
FREE_TEXT_SOURCES: tuple[str, ...] = ("twitter", "threads", "facebook")


def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def _tokens(values: Any, default: tuple[str, ...]) -> tuple[str, ...]:
    if values is None:
        return default
    if isinstance(values, str):
        values = [values]
    return tuple(str(v).lower().strip() for v in values if str(v).strip())


@dataclass(frozen=True)
class FilterConfig:
    keyword_pattern: re.Pattern[str]
    exclude_pattern: re.Pattern[str]
    include_pattern: re.Pattern[str]
    experience_pattern: re.Pattern[str]
    tech_stack_pattern: re.Pattern[str]
    primary_locations: tuple[str, ...] = PRIMARY_LOCATIONS
    secondary_locations: tuple[str, ...] = SECONDARY_LOCATIONS
    remote_locations: tuple[str, ...] = REMOTE_LOCATIONS
    remote_policy: str = "primary"
    valid_years: tuple[int, ...] | None = None
    recency_days: int = 60
    future_skew_days: int = 2
    free_text_sources: tuple[str, ...] = FREE_TEXT_SOURCES

    def __post_init__(self) -> None:
        if self.remote_policy not in REMOTE_POLICIES:
            raise ValueError(
                f"remote_policy must be one of {', '.join(REMOTE_POLICIES)}, got {self.remote_policy!r}"
            )

    @classmethod
    def default(cls) -> "FilterConfig":
        return cls.from_settings({})

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any] | None) -> "FilterConfig":
        """Build from the ``filters`` section of settings.yaml; unset keys keep defaults."""
        s = dict(settings or {})
        years = s.get("valid_years")
        cfg = cls(
            keyword_pattern=_compile(s.get("keyword_pattern") or KEYWORD_PATTERN),
            exclude_pattern=_compile(s.get("exclude_pattern") or EXCLUDE_PATTERN),
            include_pattern=_compile(s.get("include_pattern") or INCLUDE_PATTERN),
            experience_pattern=_compile(s.get("experience_pattern") or EXPERIENCE_PATTERN),
            tech_stack_pattern=_compile(s.get("tech_stack_pattern") or TECH_STACK_PATTERN),
            primary_locations=_tokens(s.get("primary_locations"), PRIMARY_LOCATIONS),
            secondary_locations=_tokens(s.get("secondary_locations"), SECONDARY_LOCATIONS),
            remote_locations=_tokens(s.get("remote_locations"), REMOTE_LOCATIONS),
            remote_policy=str(s.get("remote_policy", "primary")).lower(),
            valid_years=tuple(int(y) for y in years) if years else None,
            recency_days=int(s.get("recency_days", 60)),
            future_skew_days=int(s.get("future_skew_days", 2)),
            free_text_sources=_tokens(s.get("free_text_sources"), FREE_TEXT_SOURCES),
        )
        log.debug("Filter config: remote_policy=%s, valid_years=%s", cfg.remote_policy, cfg.valid_years)
        return cfg

    def years_for(self, now: datetime) -> tuple[int, ...]:
        """Accepted posting years; current and previous year unless configured."""
        if self.valid_years:
            return self.valid_years
        return (now.year, now.year - 1)

    def location_tier(self, location: str) -> str:
        """Return "primary", "secondary" or "" for a free-form location."""
        loc = (location or "").lower()
        primary = list(self.primary_locations)
        secondary = list(self.secondary_locations)
        if self.remote_policy == "primary":
            primary.extend(self.remote_locations)
        elif self.remote_policy == "secondary":
            secondary.extend(self.remote_locations)
        if any(token in loc for token in primary):
            return "primary"
        if any(token in loc for token in secondary):
            return "secondary"
        return ""
