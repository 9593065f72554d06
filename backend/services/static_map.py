from models.map import MapPin, ORIGIN_ICON, DESTINATION_ICON, WAYPOINT_ICON
from models.route import LineString
from typing import Any, List, Optional, Sequence
import base64
import logging
import requests
import config
from .pcmiler import auth_headers

logger = logging.getLogger(__name__)

MAP_ROUTES_PATH = "/mapRoutes"
MAP_SIZE = 400
MAP_DRAWERS = [8, 2, 7, 17, 15]
DEFAULT_IMAGE_TYPE = "image/png"


def _icon_for(index: int, count: int) -> str:
    if index == 0:
        return ORIGIN_ICON
    if index == count - 1:
        return DESTINATION_ICON
    return WAYPOINT_ICON


def build_pins(geometry: Optional[LineString], locations: Sequence[Any]) -> List[MapPin]:
    """Origin, waypoint and destination pins along the route path.

    Route path coordinates are [lon, lat]. When there is no path, falls back
    to one pin per requested location at (0, 0) so the pin count still matches
    the request.
    """
    if geometry is not None and geometry.coordinates:
        points = [(point[1], point[0]) for point in geometry.coordinates]
    else:
        points = [(0.0, 0.0) for _ in locations]
    count = len(points)
    return [
        MapPin(lat=lat, lon=lon, image=_icon_for(i, count))
        for i, (lat, lon) in enumerate(points)
    ]


def build_map_request(pins: List[MapPin]) -> dict:
    # No Viewport: the service fits the map around the pins.
    return {
        "Map": {
            "Width": MAP_SIZE,
            "Height": MAP_SIZE,
            "Drawers": MAP_DRAWERS,
            "LegendDrawer": [{"Type": 0, "DrawOnMap": True}],
            "PinDrawer": {"Pins": [pin.payload() for pin in pins]},
        }
    }


def render_static_map(pins: List[MapPin], api_key: str) -> str:
    """Render pins to a static map and return it as a base64 data URI.

    The response status is not checked: a failed render still comes back as
    a (broken) image. Non-2xx statuses are only logged.
    """
    url = f"{config.PCMILER_BASE_URL}{MAP_ROUTES_PATH}"
    logger.info(f"Rendering static map with {len(pins)} pins")

    r = requests.post(
        url,
        params={"dataset": "Current"},
        headers=auth_headers(api_key),
        json=build_map_request(pins),
        timeout=config.PCMILER_TIMEOUT,
    )
    if not r.ok:
        # TODO: decide with product whether a failed render should fail the request.
        logger.warning(f"Static map render returned {r.status_code}; passing body through as image")

    content_type = (r.headers.get("Content-Type") or DEFAULT_IMAGE_TYPE).split(";")[0].strip()
    encoded = base64.b64encode(r.content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"
