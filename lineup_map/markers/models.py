"""Pydantic models for lineup records entering and display items leaving the engine."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..spatial.clustering import Cluster, DisplayItem, Marker, UtilityType


class LineupRow(BaseModel):
    """A stored lineup record, as supplied by the marker store."""

    id: str
    title: str = ""
    map_name: str = ""
    side: Literal["t", "ct"]
    utility_type: UtilityType
    landing_x: float = Field(..., description="Landing spot x in map units")
    landing_y: float = Field(..., description="Landing spot y in map units")
    origin_x: Optional[float] = None
    origin_y: Optional[float] = None
    image_pos_path: Optional[str] = None
    image_aim_path: Optional[str] = None
    image_result_path: Optional[str] = None
    description: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[str] = None

    model_config = {"extra": "allow"}

    @field_validator("utility_type", mode="before")
    @classmethod
    def _coerce_utility(cls, value: Any) -> UtilityType:
        try:
            return UtilityType.coerce(value)
        except ValueError as exc:
            allowed = ", ".join(t.value for t in UtilityType)
            raise ValueError(f"utility_type must be one of {allowed}") from exc

    @field_validator("side", mode="before")
    @classmethod
    def _lower_side(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    def to_marker(self) -> Marker:
        """Convert to an engine marker; every non-position field goes to the payload."""

        payload = self.model_dump(exclude={"id", "landing_x", "landing_y", "utility_type"})
        return Marker(
            id=self.id,
            x=self.landing_x,
            y=self.landing_y,
            category=self.utility_type,
            payload=payload,
        )


def markers_from_rows(rows: List[Dict[str, Any]]) -> List[Marker]:
    """Validate raw lineup dicts and convert them to markers."""

    return [LineupRow.model_validate(row).to_marker() for row in rows]


class MarkerOut(BaseModel):
    kind: Literal["single"] = "single"
    id: str
    x: float
    y: float
    category: str
    side: Optional[str] = None


class ClusterOut(BaseModel):
    kind: Literal["cluster"] = "cluster"
    x: float
    y: float
    category: str
    count: int = Field(..., ge=2)
    member_ids: List[str]


def serialize_item(item: DisplayItem) -> Dict[str, Any]:
    if isinstance(item, Cluster):
        return ClusterOut(
            x=item.x,
            y=item.y,
            category=item.category.value,
            count=item.size,
            member_ids=item.member_ids,
        ).model_dump()

    marker = item.marker
    return MarkerOut(
        id=marker.id,
        x=marker.x,
        y=marker.y,
        category=marker.category.value,
        side=marker.payload.get("side"),
    ).model_dump()


def serialize_items(items: List[DisplayItem]) -> List[Dict[str, Any]]:
    """Render-ready dicts for a list of display items."""

    return [serialize_item(item) for item in items]
