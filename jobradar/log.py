"""Centralized logging: console at LOG_LEVEL, daily DEBUG file under logs/."""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
# HTTP client chatter drowns out the run summary at INFO
_NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "openai")
_configured = False


def log_dir() -> Path:
    override = os.environ.get("JOBRADAR_LOG_DIR", "").strip()
    return Path(override) if override else Path(__file__).resolve().parent.parent / "logs"


def get_logger(name: str) -> logging.Logger:
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def _file_handler(formatter: logging.Formatter) -> logging.Handler | None:
    try:
        directory = log_dir()
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"jobradar_{datetime.now():%Y-%m-%d}.log"
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def _configure() -> None:
    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    fh = _file_handler(formatter)
    if fh is not None:
        root.addHandler(fh)
