from __future__ import annotations

from collections.abc import Sequence

from burnup.domain.models import DailyTotal
from burnup.exports.formatters.cells import ISO_DATE, header, points
from burnup.exports.registry import ReportFormatter


class CsvTotalsFormatter(ReportFormatter):
    @property
    def format_name(self) -> str:
        return "csv_totals"

    def format(self, rows: Sequence[DailyTotal]) -> str:
        lines = [header("date", "pointsOpened", "pointsClosed")]
        for row in rows:
            lines.append(
                f"{row.day.strftime(ISO_DATE)},{points(row.points_opened)},{points(row.points_closed)}\n"
            )
        return "".join(lines)
