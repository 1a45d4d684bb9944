from __future__ import annotations

from datetime import date

import pytest

from burnup.container import Container
from burnup.core.config import Settings
from burnup.core.errors import ReportWriteError
from burnup.domain.enums import ReportKind
from burnup.domain.models import DailyTotal, NoPointsRow
from burnup.exports.storage.local import LocalReportStorage


def test_deliver_writes_dated_file_under_report_tree(tmp_path) -> None:
    container = Container(settings=Settings(), base_dir=tmp_path)
    rows = [NoPointsRow(item_type="Story", id="PROJ-1", was_closed=False)]

    path = container.report_pipeline.deliver(ReportKind.no_points, rows, date(2024, 3, 1))

    assert path == tmp_path / "Burnup" / "Audits" / "No Points 2024-03-01.csv"
    assert path.read_text(encoding="utf-8") == '"type","id","closed"\n"Story","PROJ-1",false\n'


def test_deliver_uses_configured_names(tmp_path) -> None:
    settings = Settings(OUTPUT_ROOT="Reports", TOTALS_DIR="Daily", TOTALS_LABEL="Burnup Totals")
    container = Container(settings=settings, base_dir=tmp_path)

    path = container.report_pipeline.deliver(
        ReportKind.totals, [DailyTotal(day=date(2024, 3, 1), points_opened=1)], date(2024, 3, 2)
    )

    assert path == tmp_path / "Reports" / "Daily" / "Burnup Totals 2024-03-02.csv"
    assert path.read_text(encoding="utf-8").endswith("2024-03-01,1.00,0.00\n")


def test_local_storage_write_failure_raises_report_write_error(tmp_path) -> None:
    blocker = tmp_path / "Burnup"
    blocker.write_text("not a directory")
    storage = LocalReportStorage(base_dir=tmp_path)

    with pytest.raises(ReportWriteError) as exc_info:
        storage.write_text("Burnup/Snapshots/report.csv", "x")

    assert exc_info.value.path == tmp_path / "Burnup" / "Snapshots" / "report.csv"
    assert "Unable to write file to disk" in str(exc_info.value)
