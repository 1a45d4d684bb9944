from __future__ import annotations

from datetime import date

from burnup.domain.models import DailyTotal, NoPointsRow, SnapshotRow
from burnup.exports.formatters.csv_no_points import CsvNoPointsFormatter
from burnup.exports.formatters.csv_snapshot import CsvSnapshotFormatter
from burnup.exports.formatters.csv_totals import CsvTotalsFormatter


def test_snapshot_formatter_layout():
    rows = [
        SnapshotRow(item_type="Story", id="PROJ-1", opened=date(2024, 1, 1), closed=date(2024, 1, 2), points=3),
        SnapshotRow(item_type="Bug", id="PROJ-2", opened=date(2024, 1, 3), points=0.5),
    ]

    text = CsvSnapshotFormatter().format(rows)

    assert text == (
        '"type","id","opened","closed","points"\n'
        '"Story","PROJ-1","2024-01-01","2024-01-02",3.00\n'
        '"Bug","PROJ-2","2024-01-03","",0.50\n'
    )


def test_snapshot_formatter_escapes_quotes():
    rows = [SnapshotRow(item_type='Story "big"', id="PROJ-1")]
    text = CsvSnapshotFormatter().format(rows)
    assert '"Story ""big""","PROJ-1","","",0.00\n' in text


def test_no_points_formatter_writes_boolean_closed_flag():
    rows = [
        NoPointsRow(item_type="Story", id="PROJ-1", was_closed=True),
        NoPointsRow(item_type="Task", id="PROJ-2", was_closed=False),
    ]

    text = CsvNoPointsFormatter().format(rows)

    assert text == (
        '"type","id","closed"\n'
        '"Story","PROJ-1",true\n'
        '"Task","PROJ-2",false\n'
    )


def test_totals_formatter_layout():
    rows = [
        DailyTotal(day=date(2024, 1, 1), points_opened=3, points_closed=0),
        DailyTotal(day=date(2024, 1, 2), points_opened=0, points_closed=1.25),
    ]

    text = CsvTotalsFormatter().format(rows)

    assert text == (
        '"date","pointsOpened","pointsClosed"\n'
        "2024-01-01,3.00,0.00\n"
        "2024-01-02,0.00,1.25\n"
    )


def test_formatters_emit_header_for_empty_reports():
    assert CsvSnapshotFormatter().format([]) == '"type","id","opened","closed","points"\n'
    assert CsvNoPointsFormatter().format([]) == '"type","id","closed"\n'
    assert CsvTotalsFormatter().format([]) == '"date","pointsOpened","pointsClosed"\n'
