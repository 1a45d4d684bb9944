from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from burnup.domain.enums import ReportKind
from burnup.exports.formatters.cells import ISO_DATE
from burnup.exports.registry import ReportFormatterRegistry
from burnup.exports.storage.base import ReportStorage

logger = logging.getLogger("burnup.exports")


class ReportTarget(BaseModel):
    """Where a report kind lands and which formatter renders it."""

    model_config = ConfigDict(frozen=True)

    directory: str
    label: str
    format_name: str


def report_key(root: str, target: ReportTarget, report_date: date) -> str:
    return f"{root}/{target.directory}/{target.label} {report_date.strftime(ISO_DATE)}.csv"


class ReportPipeline:
    def __init__(
        self,
        storage: ReportStorage,
        formatter_registry: ReportFormatterRegistry,
        targets: dict[ReportKind, ReportTarget],
        output_root: str,
    ) -> None:
        self._storage = storage
        self._formatters = formatter_registry
        self._targets = targets
        self._output_root = output_root

    def deliver(self, kind: ReportKind, rows: Sequence[Any], report_date: date) -> Path:
        """Format rows for kind and write them. ReportWriteError propagates to the caller."""
        target = self._targets.get(kind)
        if target is None:
            raise ValueError(f"No report target configured for '{kind.value}'")
        formatter = self._formatters.get(target.format_name)
        key = report_key(self._output_root, target, report_date)
        path = self._storage.write_text(key, formatter.format(rows))
        logger.info("Wrote %s report (%d rows) to %s", kind.value, len(rows), path)
        return path
