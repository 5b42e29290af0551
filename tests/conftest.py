import os
import tempfile
from datetime import datetime, timezone

import pytest

# keep log files and data out of the working tree
os.environ.setdefault("JOBRADAR_LOG_DIR", tempfile.mkdtemp(prefix="jobradar-logs-"))
os.environ.setdefault("JOBRADAR_DATA_DIR", tempfile.mkdtemp(prefix="jobradar-data-"))

from jobradar.criteria import FilterConfig  # noqa: E402
from jobradar.models import CandidateRecord  # noqa: E402


@pytest.fixture
def config():
    return FilterConfig.default()


@pytest.fixture
def now():
    return datetime(2025, 2, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_record():
    def _make(**overrides):
        fields = {
            "title": "Golang Developer Fresher",
            "company": "Mekong Tech",
            "url": "https://example.com/jobs/1",
            "description": "",
            "location": "",
            "posted_date": "N/A",
            "source": "topcv",
        }
        fields.update(overrides)
        return CandidateRecord(**fields)

    return _make
