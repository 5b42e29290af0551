"""Daily Markdown report of new matches and the raw-batch JSON dump."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from jobradar.config import LOGS_DIR, REPORTS_DIR
from jobradar.log import get_logger
from jobradar.models import CandidateRecord, ScoredRecord

log = get_logger(__name__)


def _today() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def _short_url_label(url: str) -> str:
    from urllib.parse import urlparse

    host = (urlparse(url).hostname or "").replace("www.", "")
    parts = host.split(".")
    return parts[0].capitalize() if parts and parts[0] else "Link"


def build_daily_report(
    scored_jobs: list[ScoredRecord],
    *,
    sent_urls: set[str] | None = None,
    raw_count: int = 0,
) -> str:
    sent_urls = sent_urls or set()
    lines: list[str] = [f"# Golang Job Radar — {_today()}", ""]
    lines.append(
        f"**{raw_count}** raw postings | **{len(scored_jobs)}** new matches | **{len(sent_urls)}** sent"
    )
    lines.append("")

    if not scored_jobs:
        lines.append("_No new relevant postings this run._")
        log.info("Built daily report: no new matches")
        return "\n".join(lines)

    lines.append("| # | Role | Company | Location | Score | Sent | Link |")
    lines.append("|--:|------|---------|----------|------:|------|------|")
    for i, s in enumerate(scored_jobs, 1):
        job = s.record
        title = job.title[:40] + ("…" if len(job.title) > 40 else "")
        company = job.company[:22] + ("…" if len(job.company) > 22 else "")
        loc = job.location.split(",")[0][:18] or "—"
        sent = "✅" if job.url in sent_urls else ""
        link = f"[{_short_url_label(job.url)}]({job.url})" if job.url else "—"
        lines.append(f"| {i} | {title} | {company} | {loc} | {s.match_score} | {sent} | {link} |")
    lines.append("")

    lines.append("## Why")
    lines.append("")
    for s in scored_jobs[:10]:
        lines.append(f"- **{s.record.title}** @ {s.record.company}: {', '.join(s.match_reasons) or '—'}")
    lines.append("")

    log.info("Built daily report: %d matches, %d sent", len(scored_jobs), len(sent_urls))
    return "\n".join(lines)


def write_daily_report(content: str, directory: Path | None = None) -> Path:
    directory = directory or REPORTS_DIR
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"daily_{_today()}.md"
    path.write_text(content, encoding="utf-8")
    log.info("Report written → %s", path)
    return path


def write_raw_dump(records: Iterable[CandidateRecord], directory: Path | None = None) -> Path | None:
    """Keep the day's raw batch for debugging scrapers; failures are logged only."""
    directory = directory or LOGS_DIR
    path = directory / f"job-search-{_today()}.json"
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump([r.to_dict() for r in records], f, indent=2, ensure_ascii=False)
    except OSError as exc:
        log.warning("Could not write raw dump %s: %s", path, exc)
        return None
    log.info("Raw results saved → %s", path)
    return path
