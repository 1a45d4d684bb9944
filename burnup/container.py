from __future__ import annotations

from pathlib import Path

from burnup.core.config import Settings, load_settings
from burnup.domain.enums import ReportKind
from burnup.exports.formatters.csv_no_points import CsvNoPointsFormatter
from burnup.exports.formatters.csv_snapshot import CsvSnapshotFormatter
from burnup.exports.formatters.csv_totals import CsvTotalsFormatter
from burnup.exports.pipeline import ReportPipeline, ReportTarget
from burnup.exports.registry import ReportFormatterRegistry
from burnup.exports.storage.base import ReportStorage
from burnup.exports.storage.local import LocalReportStorage
from burnup.services.report_service import BurnupService


class Container:
    settings: Settings
    report_storage: ReportStorage
    formatter_registry: ReportFormatterRegistry
    report_pipeline: ReportPipeline
    burnup_service: BurnupService

    def __init__(self, settings: Settings | None = None, base_dir: str | Path = ".") -> None:
        self.settings = settings or load_settings()
        self.report_storage = LocalReportStorage(base_dir=base_dir)
        self.formatter_registry = self._build_formatter_registry()
        self.report_pipeline = ReportPipeline(
            self.report_storage,
            self.formatter_registry,
            targets=self._build_report_targets(),
            output_root=self.settings.OUTPUT_ROOT,
        )
        self.burnup_service = BurnupService(
            self.report_pipeline,
            date_format=self.settings.SOURCE_DATE_FORMAT,
            include_last_day=self.settings.TOTALS_INCLUDE_LAST_DAY,
        )

    def _build_formatter_registry(self) -> ReportFormatterRegistry:
        registry = ReportFormatterRegistry()
        registry.register(CsvSnapshotFormatter())
        registry.register(CsvNoPointsFormatter())
        registry.register(CsvTotalsFormatter())
        return registry

    def _build_report_targets(self) -> dict[ReportKind, ReportTarget]:
        s = self.settings
        return {
            ReportKind.snapshot: ReportTarget(
                directory=s.SNAPSHOT_DIR, label=s.SNAPSHOT_LABEL, format_name="csv_snapshot"
            ),
            ReportKind.no_points: ReportTarget(
                directory=s.AUDIT_DIR, label=s.AUDIT_LABEL, format_name="csv_no_points"
            ),
            ReportKind.totals: ReportTarget(
                directory=s.TOTALS_DIR, label=s.TOTALS_LABEL, format_name="csv_totals"
            ),
        }
