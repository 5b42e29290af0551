from datetime import datetime

import pytest

from jobradar.config import DEFAULT_SETTINGS, load_settings
from jobradar.criteria import FilterConfig


def test_missing_settings_file_uses_defaults(tmp_path):
    settings = load_settings(tmp_path / "nope.yaml")
    assert settings["keywords"] == DEFAULT_SETTINGS["keywords"]
    assert settings["reporting"]["max_reports"] == 5


def test_settings_merge_nested_sections(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "sources: [mock]\n"
        "reporting:\n"
        "  min_score: 6\n"
        "filters:\n"
        "  remote_policy: ignore\n",
        encoding="utf-8",
    )
    settings = load_settings(path)
    assert settings["sources"] == ["mock"]
    assert settings["reporting"] == {"max_reports": 5, "min_score": 6}
    assert settings["filters"] == {"remote_policy": "ignore"}
    # defaults are not mutated between loads
    assert DEFAULT_SETTINGS["reporting"]["min_score"] == 0


def test_settings_must_be_a_mapping(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(path)


def test_filter_config_overrides():
    cfg = FilterConfig.from_settings({
        "primary_locations": ["Da Nang"],
        "secondary_locations": [],
        "remote_policy": "Secondary",
    })
    assert cfg.primary_locations == ("da nang",)
    assert cfg.location_tier("Đà Nẵng / Da Nang") == "primary"
    assert cfg.location_tier("Remote") == "secondary"
    assert cfg.location_tier("Hanoi") == ""


def test_filter_config_rejects_unknown_remote_policy():
    with pytest.raises(ValueError):
        FilterConfig.from_settings({"remote_policy": "sometimes"})


def test_valid_years_default_to_current_and_previous():
    cfg = FilterConfig.default()
    assert cfg.years_for(datetime(2026, 10, 19)) == (2026, 2025)


def test_custom_keyword_pattern():
    cfg = FilterConfig.from_settings({"keyword_pattern": r"\brust\b"})
    assert cfg.keyword_pattern.search("junior rust developer")
    assert not cfg.keyword_pattern.search("junior golang developer")
