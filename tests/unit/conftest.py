from __future__ import annotations

import csv
import io
from collections.abc import Callable
from typing import Any

import pytest

from burnup.adapters.ingest.jira_csv import REQUIRED_COLUMNS
from burnup.domain.models import IssueRecord

JIRA_DATE_FORMAT = "%d/%b/%y %I:%M %p"


@pytest.fixture
def date_format() -> str:
    return JIRA_DATE_FORMAT


@pytest.fixture
def make_record() -> Callable[..., IssueRecord]:
    """Build an IssueRecord with sensible defaults; key defaults to the issue id."""

    def _make(issue_id: str, **overrides: Any) -> IssueRecord:
        fields: dict[str, Any] = {
            "issue_id": issue_id,
            "key": issue_id,
            "item_type": "Story",
            "status": "To Do",
            "created": "01/Jan/24 9:00 AM",
            "resolved": "",
            "labels": "",
            "points": "",
            "parent_key": "",
        }
        fields.update(overrides)
        return IssueRecord(**fields)

    return _make


@pytest.fixture
def export_text() -> Callable[..., str]:
    """Render rows of {header: value} dicts as a Jira style CSV export."""

    def _render(rows: list[dict[str, str]], header: list[str] | None = None) -> str:
        columns = list(header) if header is not None else ["Summary", *REQUIRED_COLUMNS]
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(columns)
        for row in rows:
            writer.writerow([row.get(name, "") for name in columns])
        return buffer.getvalue()

    return _render
