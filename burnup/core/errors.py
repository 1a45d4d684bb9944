from pathlib import Path


class BurnupError(Exception):
    """Base class for fatal report generation errors."""


class InputReadError(BurnupError):
    """Raised when the issue export cannot be read at all."""


class MissingColumnsError(InputReadError):
    """Raised when the export header lacks columns the ingestor needs."""

    def __init__(self, missing: list[str]):
        self.missing = sorted(missing)
        super().__init__("Export is missing required columns: " + ", ".join(self.missing))


class ReportWriteError(BurnupError):
    """Raised when a report file cannot be written."""

    def __init__(self, message: str, path: Path | str):
        super().__init__(message)
        self.path = Path(path)
