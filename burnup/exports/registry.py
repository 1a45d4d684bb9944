from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class ReportFormatter(ABC):
    @property
    @abstractmethod
    def format_name(self) -> str:
        pass

    @abstractmethod
    def format(self, rows: Sequence[Any]) -> str:
        """Serialize report rows to text."""
        pass


class ReportFormatterRegistry:
    def __init__(self) -> None:
        self._formatters: dict[str, ReportFormatter] = {}

    def register(self, formatter: ReportFormatter) -> None:
        name = formatter.format_name
        if name in self._formatters:
            raise ValueError(f"Duplicate report formatter '{name}'")
        self._formatters[name] = formatter

    def get(self, name: str) -> ReportFormatter:
        formatter = self._formatters.get(name)
        if formatter is None:
            raise ValueError(f"Unknown report format '{name}'")
        return formatter

    def names(self) -> list[str]:
        return sorted(self._formatters)
