from __future__ import annotations

from pathlib import Path
from typing import Protocol


class ReportStorage(Protocol):
    def write_text(self, key: str, text: str) -> Path: ...
