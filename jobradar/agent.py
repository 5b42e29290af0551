"""
Golang job radar.

Runs: fetch sources → filter/score/dedup → send to Telegram → mark delivered as seen → report.
"""
from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from jobradar.ai_filter import build_classifier
from jobradar.config import SEEN_JOBS_PATH, ensure_dirs, load_settings
from jobradar.criteria import FilterConfig
from jobradar.dedup import SeenJobStore
from jobradar.log import get_logger
from jobradar.models import CandidateRecord, ScoredRecord
from jobradar.pipeline import process
from jobradar.report import build_daily_report, write_daily_report, write_raw_dump
from jobradar.sources import CandidateSource, get_sources
from jobradar.telegram import TelegramReporter

log = get_logger(__name__)


def _fetch_source(source: CandidateSource, keywords: list[str], limit: int) -> list[CandidateRecord]:
    """Wrapper for parallel source fetching."""
    try:
        results = source.fetch(keywords, limit=limit)
        log.info("[%s] returned %d postings", source.name, len(results))
        return results
    except Exception as exc:
        log.error("[%s] FAILED: %s", source.name, exc)
        return []


def collect(sources: list[CandidateSource], keywords: list[str], limit: int = 30) -> list[CandidateRecord]:
    """Fetch all sources in parallel and merge in registration order."""
    if not sources:
        return []
    log.info("Fetching %d source(s) in parallel...", len(sources))
    with ThreadPoolExecutor(max_workers=len(sources)) as pool:
        batches = list(pool.map(lambda s: _fetch_source(s, keywords, limit), sources))
    raw: list[CandidateRecord] = []
    for batch in batches:
        raw.extend(batch)
    log.info("Total raw postings collected: %d", len(raw))
    return raw


def deliver(
    scored: list[ScoredRecord],
    reporter: TelegramReporter,
    *,
    dry_run: bool = False,
    send_interval: float = 0.0,
) -> list[str]:
    """Send each job card; return URLs of the cards that actually went out."""
    sent: list[str] = []
    for i, s in enumerate(scored):
        log.info("  [%d/10] %s @ %s", s.match_score, s.record.title[:50], s.record.company)
        if dry_run:
            continue
        if i and send_interval > 0:
            time.sleep(send_interval)
        if reporter.send_job_report(s):
            sent.append(s.url)
        else:
            log.warning("Not marking as seen (send failed): %s", s.url)
    return sent


def run(
    *,
    dry_run: bool = False,
    platform: str = "all",
    use_ai: bool = True,
    max_reports: int | None = None,
    min_score: int | None = None,
    settings: dict[str, Any] | None = None,
    reporter: TelegramReporter | None = None,
    store: SeenJobStore | None = None,
    write_report: bool = True,
) -> dict[str, Any]:
    ensure_dirs()
    settings = settings or load_settings()
    config = FilterConfig.from_settings(settings.get("filters"))
    reporting = settings.get("reporting", {}) or {}
    if max_reports is None:
        max_reports = int(reporting.get("max_reports", 5))
    if min_score is None:
        min_score = int(reporting.get("min_score", 0))
    send_interval = float(reporting.get("send_interval", 0.75))

    reporter = reporter or TelegramReporter()
    store = store or SeenJobStore(SEEN_JOBS_PATH)
    log.info("Starting job search (dry-run: %s, platform: %s, AI: %s)", dry_run, platform, use_ai)

    raw: list[CandidateRecord] = []
    eligible: list[ScoredRecord] = []
    sent_urls: list[str] = []
    error: str | None = None
    try:
        raw = collect(get_sources(settings, platform), list(settings.get("keywords", [])))
        seen = store.load()
        scored = process(raw, seen, config, classifier=build_classifier(use_ai))
        eligible = [s for s in scored if s.match_score >= min_score]
        log.info("Found %d valid new jobs (min score %d)", len(eligible), min_score)

        sent_urls = deliver(
            eligible[:max_reports], reporter, dry_run=dry_run, send_interval=send_interval,
        )
        if sent_urls:
            store.save(sent_urls)
        if eligible and not dry_run:
            reporter.send_status(
                f"✅ Found {len(eligible)} new valid jobs, sent {len(sent_urls)}."
            )
    except Exception as exc:
        log.exception("Run failed: %s", exc)
        error = str(exc)[:200]
        if not dry_run:
            reporter.send_error(error)
    finally:
        write_raw_dump(raw)

    report_path = None
    if write_report:
        content = build_daily_report(eligible, sent_urls=set(sent_urls), raw_count=len(raw))
        report_path = write_daily_report(content)

    log.info(
        "Run complete — raw=%d, new=%d, sent=%d",
        len(raw), len(eligible), len(sent_urls),
    )
    return {
        "raw_count": len(raw),
        "new_count": len(eligible),
        "sent_count": len(sent_urls),
        "sent_urls": sent_urls,
        "jobs": eligible,
        "report_path": str(report_path) if report_path else None,
        "error": error,
    }
