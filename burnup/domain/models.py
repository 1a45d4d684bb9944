from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from burnup.domain.enums import WarningKind


class IssueRecord(BaseModel):
    """One row of the issue export with the columns the builder needs.

    Values are kept as read; parsing points and timestamps is the builder's job
    so a bad cell only degrades that field.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    issue_id: str = Field(alias="issueId", description="Human readable issue key, e.g. PROJ-12")
    key: str = Field(description="Stable unique issue identifier")
    item_type: str = Field(default="", alias="itemType")
    status: str = ""
    created: str = ""
    resolved: str = ""
    labels: str = ""
    points: str = ""
    parent_key: str = Field(default="", alias="parentKey")


class BacklogItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item_type: str = Field(default="", alias="itemType")
    id: str = ""
    key: str = ""
    parent_key: str = Field(default="", alias="parentKey")
    has_children: bool = Field(default=False, alias="hasChildren")
    opened: datetime | None = None
    closed: datetime | None = None
    points: float = 0.0
    tags: str = ""
    # Set only on entries created from a parent reference before the parent's own row
    placeholder: bool = Field(default=False, exclude=True)

    @classmethod
    def placeholder_for(cls, key: str) -> "BacklogItem":
        return cls(key=key, has_children=True, placeholder=True)

    def mark_has_children(self) -> None:
        # Points only count at leaf level; a parent's would double-count its children
        self.has_children = True
        self.points = 0.0

    @property
    def is_leaf(self) -> bool:
        return not self.has_children


class IngestWarning(BaseModel):
    """Recoverable problem found while building the backlog."""

    model_config = ConfigDict(populate_by_name=True)

    kind: WarningKind
    issue_id: str = Field(default="", alias="issueId")
    key: str = ""
    value: str = ""
    message: str


class SnapshotRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    item_type: str = Field(alias="type")
    id: str
    opened: date | None = None
    closed: date | None = None
    points: float = 0.0


class SnapshotReport(BaseModel):
    rows: list[SnapshotRow] = Field(default_factory=list)
    total_points: float = 0.0


class NoPointsRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    item_type: str = Field(alias="type")
    id: str
    was_closed: bool = Field(alias="closed")


class DailyTotal(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    day: date = Field(alias="date")
    points_opened: float = Field(default=0.0, alias="pointsOpened")
    points_closed: float = Field(default=0.0, alias="pointsClosed")
