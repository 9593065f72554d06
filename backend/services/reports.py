from models.route import LineString, ResolvedStop, RouteSummary
from enum import Enum
from typing import Any, List, Optional
import math


class ReportKind(Enum):
    MILEAGE = "MileageReport"
    ROUTE_PATH = "RoutePathReport"
    OTHER = ""


def _to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def extract_reports(payload: Any) -> List[dict]:
    """Flatten both upstream shapes (bare array or ``{"Reports": [...]}``) into one list."""
    if isinstance(payload, list):
        reports = payload
    elif isinstance(payload, dict):
        reports = payload.get("Reports") or []
    else:
        reports = []
    return [r for r in reports if isinstance(r, dict)]


def report_kind(report: dict) -> ReportKind:
    # Substring match so versioned names like "MileageReport:http://..." still count.
    type_name = str(report.get("__type") or "")
    if ReportKind.MILEAGE.value in type_name:
        return ReportKind.MILEAGE
    if ReportKind.ROUTE_PATH.value in type_name:
        return ReportKind.ROUTE_PATH
    return ReportKind.OTHER


def mileage_lines(report: dict) -> List[dict]:
    lines = report.get("MileageReportLines") or report.get("Lines") or []
    if not isinstance(lines, list):
        return []
    return [line for line in lines if isinstance(line, dict)]


def total_miles(lines: List[dict]) -> float:
    """Cumulative miles of the last line, or the sum of leg miles when that is missing or zero."""
    if not lines:
        return 0.0
    last_total = _to_number(lines[-1].get("TMiles"))
    if last_total:
        return max(last_total, 0.0)
    leg_sum = sum(_to_number(line.get("LMiles")) or 0.0 for line in lines)
    return max(leg_sum, 0.0)


def resolved_stops(lines: List[dict]) -> List[ResolvedStop]:
    out: List[ResolvedStop] = []
    for line in lines:
        stop = line.get("Stop")
        coords = stop.get("Coords") if isinstance(stop, dict) else None
        if not isinstance(coords, dict):
            continue
        lat = _to_number(coords.get("Lat"))
        lon = _to_number(coords.get("Lon"))
        if lat is None or lon is None:
            continue
        out.append(ResolvedStop(label=str(stop.get("Label") or ""), lat=lat, lon=lon))
    return out


def route_geometry(report: dict) -> Optional[LineString]:
    geometry = report.get("Geometry")
    if (
        isinstance(geometry, dict)
        and geometry.get("type") == "LineString"
        and isinstance(geometry.get("coordinates"), list)
    ):
        coordinates = []
        for point in geometry["coordinates"]:
            if not isinstance(point, list) or len(point) < 2:
                continue
            values = [_to_number(v) for v in point]
            if any(v is None for v in values):
                continue
            coordinates.append(values)
        return LineString(coordinates=coordinates)

    points = report.get("GeoPoints")
    if isinstance(points, list):
        coordinates = []
        for p in points:
            if not isinstance(p, dict):
                continue
            lon = _to_number(p.get("Lon"))
            lat = _to_number(p.get("Lat"))
            if lon is None or lat is None:
                continue
            coordinates.append([lon, lat])
        return LineString(coordinates=coordinates)

    return None


def normalize_reports(payload: Any) -> RouteSummary:
    """Reduce a routeReports response to miles, geometry and resolved stops.

    When a report kind appears more than once, the later report replaces
    whatever the earlier one produced. A mileage report with no lines leaves
    the previous values alone.
    """
    summary = RouteSummary()
    for report in extract_reports(payload):
        kind = report_kind(report)
        if kind is ReportKind.MILEAGE:
            lines = mileage_lines(report)
            if lines:
                summary = summary.model_copy(
                    update={"miles": total_miles(lines), "stops": resolved_stops(lines)}
                )
        elif kind is ReportKind.ROUTE_PATH:
            geometry = route_geometry(report)
            if geometry is not None:
                summary = summary.model_copy(update={"geometry": geometry})
    return summary
