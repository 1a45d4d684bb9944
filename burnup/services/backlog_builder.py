"""Backlog reconstruction from flat issue records.

Rows arrive in any order: a child may be read before or after its parent. The
store keeps one BacklogItem per issue key and enforces the leaf-points rule:

- A key first seen as somebody's parent gets a placeholder (has_children=True,
  nothing else set) until its own row arrives.
- When that row arrives it upgrades the placeholder, keeping has_children and
  dropping the row's own points.
- Every insertion walks up the ancestor chain, marking each ancestor as having
  children and zeroing its points.
- A second full row for a key already read is a duplicate and is ignored, even
  if the first one has since been found to have children.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping
from datetime import datetime
from enum import Enum
from types import MappingProxyType

from burnup.domain.enums import WarningKind
from burnup.domain.models import BacklogItem, IngestWarning, IssueRecord

logger = logging.getLogger("burnup.builder")


class InsertOutcome(str, Enum):
    inserted = "inserted"
    upgraded = "upgraded"
    duplicate = "duplicate"


def parse_points(raw: str) -> tuple[float, bool]:
    """Parse a story point cell. Empty means 0; bad or non-finite values are (0.0, False)."""
    text = raw.strip()
    if not text:
        return 0.0, True
    try:
        value = float(text)
    except ValueError:
        return 0.0, False
    if not math.isfinite(value):
        return 0.0, False
    return value, True


def parse_source_date(raw: str, fmt: str) -> tuple[datetime | None, bool]:
    """Parse an export timestamp. Empty means absent; bad values are (None, False)."""
    text = raw.strip()
    if not text:
        return None, True
    try:
        return datetime.strptime(text, fmt), True
    except ValueError:
        return None, False


class BacklogStore:
    """Owns the key -> BacklogItem map while the backlog is being built."""

    def __init__(self) -> None:
        self._items: dict[str, BacklogItem] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def get(self, key: str) -> BacklogItem | None:
        return self._items.get(key)

    def has_full_record(self, key: str) -> bool:
        existing = self._items.get(key)
        return existing is not None and not existing.placeholder

    def insert_or_upgrade(self, item: BacklogItem) -> InsertOutcome:
        """Store a full record, upgrading a placeholder for the same key.

        Returns InsertOutcome.duplicate without touching the store when a full
        record for the key is already present.
        """
        existing = self._items.get(item.key)
        if existing is None:
            item.has_children = False
            item.placeholder = False
            self._items[item.key] = item
            return InsertOutcome.inserted
        if not existing.placeholder:
            return InsertOutcome.duplicate
        item.placeholder = False
        item.mark_has_children()
        self._items[item.key] = item
        return InsertOutcome.upgraded

    def mark_ancestors(self, key: str) -> tuple[str, ...] | None:
        """Flag every ancestor of key as a parent, creating a placeholder for the first unseen one.

        Returns the keys forming a parent loop, in walk order, if the walk hit one.
        """
        item = self._items.get(key)
        parent_key = item.parent_key if item is not None else ""
        path = [key]
        while parent_key:
            if parent_key in path:
                return tuple(path[path.index(parent_key) :])
            path.append(parent_key)
            parent = self._items.get(parent_key)
            if parent is None:
                self._items[parent_key] = BacklogItem.placeholder_for(parent_key)
                return None
            parent.mark_has_children()
            parent_key = parent.parent_key
        return None

    def freeze(self) -> Mapping[str, BacklogItem]:
        return MappingProxyType(self._items)


class BacklogBuilder:
    def __init__(self, date_format: str, store: BacklogStore | None = None) -> None:
        self.date_format = date_format
        self.store = store if store is not None else BacklogStore()
        self.warnings: list[IngestWarning] = []
        self.records_read = 0
        self._reported_loops: set[frozenset[str]] = set()

    def warn(self, warning: IngestWarning) -> None:
        logger.warning("WARNING: %s", warning.message)
        self.warnings.append(warning)

    def add_record(self, record: IssueRecord) -> bool:
        """Fold one record into the backlog. Returns False if it was dropped as a duplicate."""
        self.records_read += 1

        if self.store.has_full_record(record.key):
            self.warn(
                IngestWarning(
                    kind=WarningKind.duplicate,
                    issue_id=record.issue_id,
                    key=record.key,
                    message=f'Encountered an unexpected duplicate item: "{record.issue_id}"',
                )
            )
            return False

        points, ok = parse_points(record.points)
        if not ok:
            self.warn(
                IngestWarning(
                    kind=WarningKind.invalid_points,
                    issue_id=record.issue_id,
                    key=record.key,
                    value=record.points,
                    message=f'Unable to convert {record.issue_id}\'s story points of "{record.points}" to a number',
                )
            )
        opened, ok = parse_source_date(record.created, self.date_format)
        if not ok:
            self.warn(
                IngestWarning(
                    kind=WarningKind.invalid_created,
                    issue_id=record.issue_id,
                    key=record.key,
                    value=record.created,
                    message=f'Unable to reformat {record.issue_id}\'s creation date of "{record.created}"',
                )
            )
        closed, ok = parse_source_date(record.resolved, self.date_format)
        if not ok:
            self.warn(
                IngestWarning(
                    kind=WarningKind.invalid_resolved,
                    issue_id=record.issue_id,
                    key=record.key,
                    value=record.resolved,
                    message=f'Unable to reformat {record.issue_id}\'s resolution date of "{record.resolved}"',
                )
            )

        item = BacklogItem(
            item_type=record.item_type,
            id=record.issue_id,
            key=record.key,
            parent_key=record.parent_key,
            opened=opened,
            closed=closed,
            points=points,
            tags=record.labels,
        )
        outcome = self.store.insert_or_upgrade(item)
        if outcome is InsertOutcome.upgraded:
            logger.debug("Merged %s into its placeholder", record.issue_id)

        loop = self.store.mark_ancestors(record.key)
        if loop is not None and frozenset(loop) not in self._reported_loops:
            # One warning per loop, not per descendant walking into it
            self._reported_loops.add(frozenset(loop))
            chain = " -> ".join(loop)
            self.warn(
                IngestWarning(
                    kind=WarningKind.parent_cycle,
                    issue_id=record.issue_id,
                    key=record.key,
                    value=chain,
                    message=f"Parent chain of {record.issue_id} runs into a loop ({chain}); stopped walking",
                )
            )
        return True

    def build(self, records: Iterable[IssueRecord]) -> Mapping[str, BacklogItem]:
        for record in records:
            self.add_record(record)
        backlog = self.store.freeze()
        self.log_summary(backlog)
        return backlog

    def log_summary(self, backlog: Mapping[str, BacklogItem]) -> None:
        leaves = sum(1 for item in backlog.values() if item.is_leaf)
        unresolved = sum(1 for item in backlog.values() if item.placeholder)
        by_kind = Counter(w.kind.value for w in self.warnings)
        logger.info(
            "Backlog built: records=%d items=%d leaves=%d unresolved_parents=%d warnings=%s",
            self.records_read,
            len(backlog),
            leaves,
            unresolved,
            dict(sorted(by_kind.items())),
        )
