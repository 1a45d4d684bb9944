from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import TextIO

from pydantic import BaseModel, Field

from burnup.adapters.ingest.jira_csv import read_issue_records
from burnup.domain.enums import ReportKind
from burnup.domain.models import IngestWarning
from burnup.exports.pipeline import ReportPipeline
from burnup.services.aggregation_service import (
    build_daily_totals,
    build_no_points_audit,
    build_snapshot,
)
from burnup.services.backlog_builder import BacklogBuilder

logger = logging.getLogger("burnup.report")


class BurnupResult(BaseModel):
    paths: dict[ReportKind, Path] = Field(default_factory=dict)
    item_count: int = 0
    total_points: float = 0.0
    warnings: list[IngestWarning] = Field(default_factory=list)


class BurnupService:
    def __init__(
        self,
        pipeline: ReportPipeline,
        date_format: str,
        include_last_day: bool = True,
    ) -> None:
        self.pipeline = pipeline
        self.date_format = date_format
        self.include_last_day = include_last_day

    def generate(self, stream: TextIO, report_date: date) -> BurnupResult:
        """Read an export, rebuild its backlog and write the three burn-up reports.

        Input and write failures propagate; nothing already written is cleaned up.
        """
        logger.info("Generating burn-up reports dated %s", report_date.isoformat())
        builder = BacklogBuilder(self.date_format)
        records = read_issue_records(stream, on_warning=builder.warnings.append)
        backlog = builder.build(records)

        snapshot = build_snapshot(backlog)
        audit = build_no_points_audit(backlog)
        totals = build_daily_totals(backlog, include_last_day=self.include_last_day)

        paths = {
            ReportKind.snapshot: self.pipeline.deliver(ReportKind.snapshot, snapshot.rows, report_date),
            ReportKind.no_points: self.pipeline.deliver(ReportKind.no_points, audit, report_date),
            ReportKind.totals: self.pipeline.deliver(ReportKind.totals, totals, report_date),
        }
        return BurnupResult(
            paths=paths,
            item_count=len(backlog),
            total_points=snapshot.total_points,
            warnings=list(builder.warnings),
        )
