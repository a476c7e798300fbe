"""Flattened query results handed back to callers.

Architecture:
    The nested response tree is flattened into two id-keyed indexes:
    - points: point id -> ordered values
    - point_sets: point-set id -> ids of its direct children

    Either index is None when the server returned no entity of that kind,
    which keeps "nothing returned" distinct from an empty mapping.

JSON output uses the field names ``point_set_id``/``point_id`` through
serialization aliases.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProcessedValue(BaseModel):
    """One timestamped value of a point."""

    time: datetime | None = None
    value: str

    model_config = ConfigDict(frozen=True)


class ProcessedPointSet(BaseModel):
    """Direct children of one point-set, in order of arrival."""

    point_set_ids: list[str] = Field(default_factory=list, serialization_alias="point_set_id")
    point_ids: list[str] = Field(default_factory=list, serialization_alias="point_id")

    def extend(self, other: ProcessedPointSet) -> None:
        """Append other's children after this entry's children."""
        self.point_set_ids.extend(other.point_set_ids)
        self.point_ids.extend(other.point_ids)


PointSetMap = dict[str, ProcessedPointSet]
PointMap = dict[str, list[ProcessedValue]]


class FetchResult(BaseModel):
    """Merged result of a complete (possibly paginated) fetch."""

    point_sets: PointSetMap | None = None
    points: PointMap | None = None

    def to_json_dict(self) -> dict:
        """Return a JSON-ready dict, dropping indexes with no entries."""
        out: dict = {}
        if self.point_sets:
            out["point_sets"] = {
                key: entry.model_dump(mode="json", by_alias=True)
                for key, entry in self.point_sets.items()
            }
        if self.points:
            out["points"] = {
                key: [value.model_dump(mode="json") for value in values]
                for key, values in self.points.items()
            }
        return out


class PageResult(FetchResult):
    """Result of a single page; an empty cursor means no further pages."""

    cursor: str = ""

    def to_json_dict(self) -> dict:
        out = super().to_json_dict()
        if self.cursor:
            out["cursor"] = self.cursor
        return out
