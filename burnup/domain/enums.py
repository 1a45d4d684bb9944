from enum import Enum


class ReportKind(str, Enum):
    snapshot = "snapshot"
    no_points = "no_points"
    totals = "totals"


class WarningKind(str, Enum):
    """Recoverable problems found while ingesting an export.

    - duplicate: a second full record for a key already read; record dropped
    - invalid_points / invalid_created / invalid_resolved: field defaulted
    - parent_cycle: ancestor walk revisited a key and stopped
    - short_row: row has fewer cells than the header requires; row dropped
    """

    duplicate = "duplicate"
    invalid_points = "invalid_points"
    invalid_created = "invalid_created"
    invalid_resolved = "invalid_resolved"
    parent_cycle = "parent_cycle"
    short_row = "short_row"
