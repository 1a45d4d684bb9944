from __future__ import annotations

from typing import Any, Sequence

import pytest

from burnup.container import Container
from burnup.core.config import Settings
from burnup.exports.registry import ReportFormatter, ReportFormatterRegistry


class ExampleFormatter(ReportFormatter):
    @property
    def format_name(self) -> str:
        return "csv_snapshot"

    def format(self, rows: Sequence[Any]) -> str:
        return ""


def test_formatter_registry_returns_registered_instance() -> None:
    registry = ReportFormatterRegistry()
    formatter = ExampleFormatter()
    registry.register(formatter)

    assert registry.get("csv_snapshot") is formatter
    assert registry.names() == ["csv_snapshot"]


def test_formatter_registry_rejects_duplicates() -> None:
    registry = ReportFormatterRegistry()
    registry.register(ExampleFormatter())

    with pytest.raises(ValueError, match="Duplicate report formatter"):
        registry.register(ExampleFormatter())


def test_formatter_registry_unknown_name() -> None:
    with pytest.raises(ValueError, match="Unknown report format 'xlsx'"):
        ReportFormatterRegistry().get("xlsx")


def test_container_registers_every_csv_formatter(tmp_path) -> None:
    container = Container(settings=Settings(), base_dir=tmp_path)
    assert container.formatter_registry.names() == ["csv_no_points", "csv_snapshot", "csv_totals"]
