"""Raw postings dumped to disk by the browser scrapers (TopCV, ITviec, LinkedIn, X...).

The file is a JSON array of job objects; camelCase keys such as ``postedDate``
are accepted and missing fields become empty text.
"""
from __future__ import annotations

import json
from pathlib import Path

from jobradar.config import PROJECT_ROOT
from jobradar.log import get_logger
from jobradar.models import CandidateRecord
from jobradar.sources.base import CandidateSource

log = get_logger(__name__)


class JsonFileSource(CandidateSource):
    name = "file"

    def __init__(self, settings: dict | None = None, path: Path | str | None = None) -> None:
        settings = settings or {}
        configured = path or settings.get("file_source", {}).get("path", "data/raw-jobs.json")
        p = Path(configured)
        self.path = p if p.is_absolute() else PROJECT_ROOT / p

    def fetch(self, keywords: list[str], limit: int = 30) -> list[CandidateRecord]:
        if not self.path.exists():
            log.info("No raw job dump at %s", self.path)
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            log.warning("Could not read raw job dump %s: %s", self.path, exc)
            return []
        if not isinstance(data, list):
            log.warning("Raw job dump %s is not a JSON array", self.path)
            return []

        records = [CandidateRecord.from_dict(item) for item in data if isinstance(item, dict)]
        log.debug("Read %d raw postings from %s", len(records), self.path.name)
        # limit applies to API sources only
        return records
