from __future__ import annotations

from datetime import date

ISO_DATE = "%Y-%m-%d"


def quoted(value: str) -> str:
    """Quote a text cell, doubling embedded quotes."""
    return '"' + value.replace('"', '""') + '"'


def quoted_date(value: date | None) -> str:
    return quoted(value.strftime(ISO_DATE) if value is not None else "")


def points(value: float) -> str:
    return f"{value:.2f}"


def boolean(value: bool) -> str:
    return "true" if value else "false"


def header(*names: str) -> str:
    return ",".join(quoted(name) for name in names) + "\n"
