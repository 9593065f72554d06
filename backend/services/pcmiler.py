from models.stop import ClassifiedStop, StreetAddressStop
from enum import IntEnum
from typing import Any, Iterable, List
import logging
import requests
import config
from .errors import UpstreamServiceError

logger = logging.getLogger(__name__)

ROUTE_REPORTS_PATH = "/route/routeReports"
MILEAGE_REPORT_TYPE = "MileageReportType:http://pcmiler.alk.com/APIs/v1.0"
ROUTE_PATH_REPORT_TYPE = "RoutePathReportType:http://pcmiler.alk.com/APIs/v1.0"


class VehicleType(IntEnum):
    TRUCK = 0
    LIGHT_TRUCK = 1
    AUTO = 2


class RoutingType(IntEnum):
    PRACTICAL = 0
    SHORTEST = 1


class DistanceUnits(IntEnum):
    MILES = 0
    KILOMETERS = 1


class HazMatType(IntEnum):
    NONE = 0


def address_stops(locations: Iterable[Any]) -> List[StreetAddressStop]:
    """Wrap pre-formed address strings as stops without classifying them."""
    return [
        StreetAddressStop(label=f"Stop {i + 1}", text=str(loc).strip())
        for i, loc in enumerate(locations)
    ]


def build_route_request(stops: List[ClassifiedStop], highway_only: bool) -> dict:
    """Build the routeReports body asking for a mileage and a route-path report."""
    return {
        "ReportRoutes": [
            {
                "Stops": [stop.payload() for stop in stops],
                "RouteOptions": {
                    "VehicleType": int(VehicleType.TRUCK),
                    "RoutingType": int(RoutingType.PRACTICAL),
                    "HighwayOnly": highway_only,
                    "DistanceUnits": int(DistanceUnits.MILES),
                    "HazMatType": int(HazMatType.NONE),
                    "TollDiscourage": False,
                },
                "ReportTypes": [
                    {"__type": MILEAGE_REPORT_TYPE, "TimeInSeconds": False},
                    {"__type": ROUTE_PATH_REPORT_TYPE},
                ],
            }
        ]
    }


def auth_headers(api_key: str) -> dict:
    return {"Content-Type": "application/json", "Authorization": api_key}


def fetch_route_reports(body: dict, api_key: str) -> Any:
    """POST a report request and return the decoded JSON.

    Raises UpstreamServiceError on any non-2xx status. Not retried.
    """
    url = f"{config.PCMILER_BASE_URL}{ROUTE_REPORTS_PATH}"
    stop_count = len(body.get("ReportRoutes", [{}])[0].get("Stops", []))
    logger.info(f"Requesting route reports for {stop_count} stops")

    r = requests.post(
        url,
        params={"dataVersion": "Current"},
        headers=auth_headers(api_key),
        json=body,
        timeout=config.PCMILER_TIMEOUT,
    )

    if not r.ok:
        logger.error(f"Route reports error {r.status_code}: {r.text}")
        raise UpstreamServiceError(r.status_code, r.text)

    return r.json()
