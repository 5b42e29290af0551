"""
Run the job radar once a day at a fixed local hour (default 09:00 Asia/Ho_Chi_Minh).

Usage:
  - Cron (recommended): 0 9 * * * TZ=Asia/Ho_Chi_Minh cd /path/to/project && .venv/bin/python -m jobradar.run_daily --once
  - Or keep this process running: python -m jobradar.run_daily
"""
from __future__ import annotations

import sys
import time
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from jobradar.agent import run
from jobradar.config import load_settings
from jobradar.log import get_logger

log = get_logger(__name__)


def next_run(now: datetime, hour: int, minute: int = 0) -> datetime:
    """Next occurrence of hour:minute strictly after *now* (same tz as *now*)."""
    target = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if now >= target:
        target = target + timedelta(days=1)
    return target


def main() -> None:
    schedule = load_settings().get("schedule", {}) or {}
    tz = ZoneInfo(schedule.get("timezone", "Asia/Ho_Chi_Minh"))
    hour = int(schedule.get("hour", 9))
    log.info("Scheduler: run daily at %d:00 %s", hour, tz.key)
    while True:
        now = datetime.now(tz)
        target = next_run(now, hour)
        wait_secs = (target - now).total_seconds()
        log.info("Next run at %s (in %.1f hours)", target, wait_secs / 3600)
        time.sleep(wait_secs)
        log.info("Running job radar...")
        try:
            run()
        except Exception as exc:
            log.error("Scheduled run failed: %s", exc)
        log.info("Done. Next run tomorrow.")


if __name__ == "__main__":
    if "--once" in sys.argv:
        run()
        sys.exit(0)
    main()
