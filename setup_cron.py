#!/usr/bin/env python3
"""
Install a cron job that runs the job radar once a day.

Hour and timezone come from the ``schedule`` section of config/settings.yaml.
Run once: python setup_cron.py
"""
from __future__ import annotations

import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from jobradar.config import load_settings


def cron_entry(hour: int, timezone: str, root: Path, python: Path) -> str:
    return f"0 {hour} * * * TZ={timezone} cd {root} && {python} -m jobradar.run_daily --once"


def _write_crontab_file(content: str) -> None:
    path = ROOT / "crontab.txt"
    path.write_text(content + "\n", encoding="utf-8")
    print(f"Wrote {path}")


def main() -> int:
    schedule = load_settings().get("schedule", {}) or {}
    hour = int(schedule.get("hour", 9))
    timezone = schedule.get("timezone", "Asia/Ho_Chi_Minh")
    venv_python = ROOT / ".venv" / "bin" / "python"
    if not venv_python.exists():
        print("Error: .venv not found. Run: python -m venv .venv && .venv/bin/pip install -e .")
        return 1
    entry = cron_entry(hour, timezone, ROOT, venv_python)

    try:
        out = subprocess.run(["crontab", "-l"], capture_output=True, text=True, timeout=5)
        existing = (out.stdout or "").strip() if out.returncode == 0 else ""
        if entry in existing:
            print("Cron entry already present. No change.")
            return 0
        new_crontab = (existing + "\n" + entry).strip() if existing else entry
        proc = subprocess.run(["crontab", "-"], input=new_crontab, capture_output=True, text=True, timeout=5)
        if proc.returncode != 0:
            _write_crontab_file(new_crontab)
            print("Could not install crontab automatically. Run manually:")
            print(f"  crontab {ROOT / 'crontab.txt'}")
            return 1
        print(f"Cron installed: daily at {hour}:00 {timezone}")
        print(f"  Entry: {entry}")
        return 0
    except subprocess.TimeoutExpired:
        _write_crontab_file(entry)
        print(f"Crontab timed out. To install manually, run: crontab {ROOT / 'crontab.txt'}")
        return 1
    except FileNotFoundError:
        _write_crontab_file(entry)
        print("crontab not found. On Windows use Task Scheduler; on Mac/Linux ensure cron is available.")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
