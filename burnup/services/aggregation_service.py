from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterator, Mapping
from datetime import date, datetime, timedelta

from burnup.domain.models import (
    BacklogItem,
    DailyTotal,
    NoPointsRow,
    SnapshotReport,
    SnapshotRow,
)

logger = logging.getLogger("burnup.aggregation")


def _day(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


def leaf_items(backlog: Mapping[str, BacklogItem]) -> Iterator[BacklogItem]:
    """Items without children, in backlog order. Parents never carry points."""
    return (item for item in backlog.values() if item.is_leaf)


def build_snapshot(backlog: Mapping[str, BacklogItem]) -> SnapshotReport:
    rows: list[SnapshotRow] = []
    total = 0.0
    for item in leaf_items(backlog):
        total += item.points
        rows.append(
            SnapshotRow(
                item_type=item.item_type,
                id=item.id,
                opened=_day(item.opened),
                closed=_day(item.closed),
                points=item.points,
            )
        )
    logger.info("Snapshot: %d leaf items, %.2f points", len(rows), total)
    return SnapshotReport(rows=rows, total_points=total)


def build_no_points_audit(backlog: Mapping[str, BacklogItem]) -> list[NoPointsRow]:
    rows = [
        NoPointsRow(item_type=item.item_type, id=item.id, was_closed=item.closed is not None)
        for item in leaf_items(backlog)
        if item.points == 0
    ]
    logger.info("No-points audit: %d leaf items without an estimate", len(rows))
    return rows


def build_daily_totals(
    backlog: Mapping[str, BacklogItem], include_last_day: bool = True
) -> list[DailyTotal]:
    """Points opened and closed per calendar day across the active date range.

    Days run from the earliest opened/closed date to the latest one. With
    include_last_day=False the latest day is left out (half-open range).
    Timestamps are bucketed as read; no timezone conversion is done.
    """
    opened_pivot: dict[date, float] = defaultdict(float)
    closed_pivot: dict[date, float] = defaultdict(float)
    first: date | None = None
    last: date | None = None

    for item in leaf_items(backlog):
        if item.points <= 0:
            continue
        for stamp, pivot in ((item.opened, opened_pivot), (item.closed, closed_pivot)):
            day = _day(stamp)
            if day is None:
                continue
            pivot[day] += item.points
            if first is None or day < first:
                first = day
            if last is None or day > last:
                last = day

    if first is None or last is None:
        return []

    end = last + timedelta(days=1) if include_last_day else last
    totals: list[DailyTotal] = []
    day = first
    while day < end:
        totals.append(
            DailyTotal(
                day=day,
                points_opened=opened_pivot.get(day, 0.0),
                points_closed=closed_pivot.get(day, 0.0),
            )
        )
        day += timedelta(days=1)
    logger.info("Daily totals: %d days from %s to %s", len(totals), first, last)
    return totals
