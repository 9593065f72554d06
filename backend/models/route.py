from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Literal, Optional


class RouteMilesRequest(BaseModel):
    stops: List[Any] = []  # e.g. ["60601", "Chicago, IL", "41.88, -87.62"]
    devKey: Optional[str] = None


class RouteMapRequest(BaseModel):
    locations: List[Any] = []


class LineString(BaseModel):
    type: Literal["LineString"] = "LineString"
    coordinates: List[List[float]]


class ResolvedStop(BaseModel):
    """A stop echoed back by the routing service with its coordinate."""
    model_config = ConfigDict(populate_by_name=True)

    label: str = Field("", alias="Label")
    lat: float = Field(alias="Lat")
    lon: float = Field(alias="Lon")


class RouteSummary(BaseModel):
    miles: float = 0
    geometry: Optional[LineString] = None
    stops: List[ResolvedStop] = []
