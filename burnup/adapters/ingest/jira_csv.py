"""Read Jira issue-list CSV exports into typed records.

The header row is resolved once into a ColumnLayout; rows are then streamed
one at a time so the raw export never has to be held in memory.
"""

from __future__ import annotations

import csv
import logging
import sys
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from pydantic import BaseModel, ConfigDict

from burnup.core.errors import InputReadError, MissingColumnsError
from burnup.domain.enums import WarningKind
from burnup.domain.models import IngestWarning, IssueRecord

logger = logging.getLogger("burnup.ingest")

# Header names as they appear in a Jira issue export. Jira calls the human
# readable key "Issue key" and the stable numeric identifier "Issue id".
FIELD_ISSUE_ID = "Issue key"
FIELD_ISSUE_KEY = "Issue id"
FIELD_ISSUE_TYPE = "Issue Type"
FIELD_STATUS = "Status"
FIELD_CREATED = "Created"
FIELD_RESOLVED = "Resolved"
FIELD_LABELS = "Labels"
FIELD_POINTS = "Custom field (Story point estimate)"
FIELD_PARENT_KEY = "Parent"

REQUIRED_COLUMNS: tuple[str, ...] = (
    FIELD_ISSUE_ID,
    FIELD_ISSUE_KEY,
    FIELD_ISSUE_TYPE,
    FIELD_STATUS,
    FIELD_CREATED,
    FIELD_RESOLVED,
    FIELD_LABELS,
    FIELD_POINTS,
    FIELD_PARENT_KEY,
)

STDIN_SOURCE = "<stdin>"

# Description and comment cells can exceed the csv module default of 128 KiB.
# The limit is stored in a C long, so stay within 32 bits.
MAX_CELL_SIZE = 2**31 - 1


class ColumnLayout(BaseModel):
    """Column positions of the required fields, resolved from the header row."""

    model_config = ConfigDict(frozen=True)

    issue_id: int
    key: int
    item_type: int
    status: int
    created: int
    resolved: int
    labels: int
    points: int
    parent_key: int

    @classmethod
    def from_header(cls, header: Sequence[str]) -> "ColumnLayout":
        positions: dict[str, int] = {}
        for index, name in enumerate(header):
            # Last occurrence wins when Jira repeats a header
            positions[name.strip()] = index
        missing = [name for name in REQUIRED_COLUMNS if name not in positions]
        if missing:
            raise MissingColumnsError(missing)
        return cls(
            issue_id=positions[FIELD_ISSUE_ID],
            key=positions[FIELD_ISSUE_KEY],
            item_type=positions[FIELD_ISSUE_TYPE],
            status=positions[FIELD_STATUS],
            created=positions[FIELD_CREATED],
            resolved=positions[FIELD_RESOLVED],
            labels=positions[FIELD_LABELS],
            points=positions[FIELD_POINTS],
            parent_key=positions[FIELD_PARENT_KEY],
        )

    @property
    def width(self) -> int:
        """Minimum number of cells a row needs to cover every required column."""
        return max(self.model_dump().values()) + 1

    def parse_row(self, row: Sequence[str]) -> IssueRecord:
        return IssueRecord(
            issue_id=row[self.issue_id],
            key=row[self.key].strip(),
            item_type=row[self.item_type],
            status=row[self.status],
            created=row[self.created],
            resolved=row[self.resolved],
            labels=row[self.labels],
            points=row[self.points],
            parent_key=row[self.parent_key].strip(),
        )


def read_issue_records(
    stream: TextIO,
    on_warning: Callable[[IngestWarning], None] | None = None,
) -> Iterator[IssueRecord]:
    """Yield one IssueRecord per data row of a Jira CSV export.

    Raises:
        MissingColumnsError: header lacks a required column
        InputReadError: the stream is empty, cannot be decoded or is not CSV
    """
    if csv.field_size_limit() < MAX_CELL_SIZE:
        csv.field_size_limit(MAX_CELL_SIZE)
    reader = csv.reader(stream)
    try:
        header = next(reader, None)
        if header is None:
            raise InputReadError("Export is empty; expected a header row")
        layout = ColumnLayout.from_header(header)
        logger.debug("Resolved column layout: %s", layout)

        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            if len(row) < layout.width:
                warning = IngestWarning(
                    kind=WarningKind.short_row,
                    value=str(len(row)),
                    message=(
                        f"Skipping line {reader.line_num}: {len(row)} cells, "
                        f"expected at least {layout.width}"
                    ),
                )
                logger.warning("WARNING: %s", warning.message)
                if on_warning is not None:
                    on_warning(warning)
                continue
            yield layout.parse_row(row)
    except (csv.Error, OSError, UnicodeDecodeError) as exc:
        raise InputReadError(f"Unable to read export near line {reader.line_num}: {exc}") from exc


@contextmanager
def open_input(path: Path | None, encoding: str = "utf-8-sig") -> Iterator[TextIO]:
    """Open the export at path, or stdin when path is None."""
    if path is None:
        stdin = sys.stdin
        if hasattr(stdin, "reconfigure"):
            stdin.reconfigure(encoding=encoding, newline="")  # type: ignore[union-attr]
        yield stdin
        return
    try:
        handle = path.open(newline="", encoding=encoding)
    except OSError as exc:
        raise InputReadError(f"Unable to open export {path}: {exc}") from exc
    with handle:
        yield handle
