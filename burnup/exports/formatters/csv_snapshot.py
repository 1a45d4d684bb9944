from __future__ import annotations

from collections.abc import Sequence

from burnup.domain.models import SnapshotRow
from burnup.exports.formatters.cells import header, points, quoted, quoted_date
from burnup.exports.registry import ReportFormatter


class CsvSnapshotFormatter(ReportFormatter):
    @property
    def format_name(self) -> str:
        return "csv_snapshot"

    def format(self, rows: Sequence[SnapshotRow]) -> str:
        lines = [header("type", "id", "opened", "closed", "points")]
        for row in rows:
            cells = [
                quoted(row.item_type),
                quoted(row.id),
                quoted_date(row.opened),
                quoted_date(row.closed),
                points(row.points),
            ]
            lines.append(",".join(cells) + "\n")
        return "".join(lines)
