from __future__ import annotations

from collections.abc import Sequence

from burnup.domain.models import NoPointsRow
from burnup.exports.formatters.cells import boolean, header, quoted
from burnup.exports.registry import ReportFormatter


class CsvNoPointsFormatter(ReportFormatter):
    """Audit of leaf items without an estimate; `closed` holds whether the item has a close date."""

    @property
    def format_name(self) -> str:
        return "csv_no_points"

    def format(self, rows: Sequence[NoPointsRow]) -> str:
        lines = [header("type", "id", "closed")]
        for row in rows:
            lines.append(f"{quoted(row.item_type)},{quoted(row.id)},{boolean(row.was_closed)}\n")
        return "".join(lines)
