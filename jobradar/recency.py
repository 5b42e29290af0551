"""Decide whether a free-form posting date is recent enough to report.

The classifier only rejects on positive evidence of staleness: sentinel values,
unparseable text and parse errors all count as recent.
"""
from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from jobradar.criteria import FilterConfig
from jobradar.log import get_logger

log = get_logger(__name__)

SENTINELS: frozenset[str] = frozenset({"", "n/a", "recent"})

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")
_SLASH_DATE = re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{4})\b")
_YEAR_ONLY = re.compile(r"\b(20\d{2})\b")


def _utc(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def parse_posted_date(value: str) -> datetime | None:
    """Parse ISO ``YYYY-MM-DD...`` or slash ``D/M/YYYY`` (``M/D/YYYY`` when D/M is invalid)."""
    text = value.strip()
    if _ISO_DATE.match(text):
        try:
            return datetime.strptime(text[:10], "%Y-%m-%d").replace(tzinfo=timezone.utc)
        except ValueError:
            pass

    m = _SLASH_DATE.search(text)
    if m:
        first, second, year = (int(g) for g in m.groups())
        for day, month in ((first, second), (second, first)):
            try:
                return datetime(year, month, day, tzinfo=timezone.utc)
            except ValueError:
                continue
    return None


def is_recent(
    date_expression: str | None,
    config: FilterConfig | None = None,
    now: datetime | None = None,
) -> bool:
    if date_expression is None:
        return True
    text = str(date_expression).strip()
    if text.lower() in SENTINELS:
        return True

    cfg = config or FilterConfig.default()
    current = _utc(now)
    try:
        posted = parse_posted_date(text)
        if posted is not None:
            age = current - posted
            return timedelta(days=-cfg.future_skew_days) <= age <= timedelta(days=cfg.recency_days)

        m = _YEAR_ONLY.search(text)
        if m is None:
            return True
        return int(m.group(1)) in cfg.years_for(current)
    except (ValueError, TypeError, OverflowError) as exc:
        log.debug("Could not evaluate posted date %r (%s); treating as recent", text, exc)
        return True
