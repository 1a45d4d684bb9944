from __future__ import annotations

import pytest
from pydantic import ValidationError

from burnup.core.config import Settings, _resolve_env_files_from_override, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("BURNUP_ENV_FILE", raising=False)
    for name in Settings.model_fields:
        monkeypatch.delenv(f"BURNUP_{name}", raising=False)


def test_defaults_match_report_conventions():
    s = Settings()
    assert s.OUTPUT_ROOT == "Burnup"
    assert (s.SNAPSHOT_DIR, s.AUDIT_DIR, s.TOTALS_DIR) == ("Snapshots", "Audits", "Totals")
    assert (s.SNAPSHOT_LABEL, s.AUDIT_LABEL, s.TOTALS_LABEL) == ("Backlog Snapshot", "No Points", "Totals")
    assert s.SOURCE_DATE_FORMAT == "%d/%b/%y %I:%M %p"
    assert s.TOTALS_INCLUDE_LAST_DAY is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("BURNUP_OUTPUT_ROOT", "Reports")
    monkeypatch.setenv("BURNUP_TOTALS_INCLUDE_LAST_DAY", "false")

    s = load_settings()

    assert s.OUTPUT_ROOT == "Reports"
    assert s.TOTALS_INCLUDE_LAST_DAY is False


def test_empty_output_names_are_rejected():
    with pytest.raises(ValidationError, match="AUDIT_LABEL"):
        Settings(AUDIT_LABEL="  ")


def test_env_file_override_is_loaded(monkeypatch, tmp_path):
    (tmp_path / "burnup.env").write_text("BURNUP_SNAPSHOT_LABEL=Leaf Snapshot\n", encoding="utf-8")
    monkeypatch.setenv("BURNUP_ENV_FILE", "burnup.env")

    s = load_settings(base_dir=tmp_path)

    assert s.SNAPSHOT_LABEL == "Leaf Snapshot"


def test_env_file_override_accepts_a_list(monkeypatch, tmp_path):
    monkeypatch.setenv("BURNUP_ENV_FILE", "a.env, /etc/b.env")
    assert _resolve_env_files_from_override(tmp_path) == (str(tmp_path / "a.env"), "/etc/b.env")

    monkeypatch.setenv("BURNUP_ENV_FILE", " , ")
    assert _resolve_env_files_from_override(tmp_path) is None
