from pydantic import BaseModel
from .route import RouteSummary


class RouteMilesResponse(RouteSummary):
    pass


class RouteMapResponse(BaseModel):
    ok: bool = True
    miles: float
    staticMapUrl: str


class PublicConfigResponse(BaseModel):
    mapsKey: str = ""
