"""Load settings.yaml and env configuration."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobradar.log import get_logger

log = get_logger(__name__)

load_dotenv()

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = PROJECT_ROOT / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.yaml"
DATA_DIR: Path = Path(os.environ.get("JOBRADAR_DATA_DIR", "").strip() or PROJECT_ROOT / "data")
LOGS_DIR: Path = Path(os.environ.get("JOBRADAR_LOG_DIR", "").strip() or PROJECT_ROOT / "logs")
REPORTS_DIR: Path = PROJECT_ROOT / "reports"
SEEN_JOBS_PATH: Path = DATA_DIR / "seen-jobs.json"

DEFAULT_SETTINGS: dict[str, Any] = {
    "keywords": [
        "golang fresher",
        "remote intern golang",
        "junior golang developer",
        "golang backend intern",
        "entry level golang",
        "go developer fresher",
        "golang internship",
    ],
    "sources": ["remotive"],
    "filters": {},
    "reporting": {"max_reports": 5, "min_score": 0},
    "schedule": {"hour": 9, "timezone": "Asia/Ho_Chi_Minh"},
}


def load_settings(path: Path | None = None) -> dict[str, Any]:
    """Read settings.yaml over the built-in defaults; a missing file keeps defaults."""
    path = path or SETTINGS_PATH
    settings: dict[str, Any] = {k: (dict(v) if isinstance(v, dict) else v) for k, v in DEFAULT_SETTINGS.items()}
    if not path.exists():
        log.warning("No settings file at %s, using defaults", path)
        return settings

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} must contain a mapping at the top level")

    for key, value in data.items():
        if isinstance(value, dict) and isinstance(settings.get(key), dict):
            settings[key].update(value)
        elif value is not None:
            settings[key] = value
    return settings


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def ensure_dirs() -> None:
    for d in (DATA_DIR, LOGS_DIR, REPORTS_DIR):
        d.mkdir(parents=True, exist_ok=True)
