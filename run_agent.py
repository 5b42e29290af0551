#!/usr/bin/env python3
"""Entry point to run the Golang job radar once."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from jobradar.log import get_logger

log = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    from jobradar.sources import SOURCES

    parser = argparse.ArgumentParser(description="Search for Golang fresher jobs and report new ones to Telegram.")
    parser.add_argument("--dry-run", action="store_true", help="score and log jobs without sending or marking them seen")
    parser.add_argument("--platform", default="all", choices=["all", *SOURCES], help="only fetch this source")
    parser.add_argument("--no-ai", action="store_true", help="skip LLM validation of social posts")
    parser.add_argument("--max-reports", type=int, default=None, help="max job cards to send (default from settings)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    from jobradar.agent import run

    result = run(
        dry_run=args.dry_run,
        platform=args.platform,
        use_ai=not args.no_ai,
        max_reports=args.max_reports,
    )
    log.info("Run complete.")
    log.info("  Raw postings: %d", result["raw_count"])
    log.info("  New relevant: %d", result["new_count"])
    log.info("  Sent: %d", result["sent_count"])
    if result["report_path"]:
        log.info("  Report: %s", result["report_path"])
    return 1 if result["error"] else 0


if __name__ == "__main__":
    sys.exit(main())
