from services.reports import (
    ReportKind,
    extract_reports,
    normalize_reports,
    report_kind,
)


def test_object_wrapped_reports(mileage_report, route_path_report):
    summary = normalize_reports({"Reports": [mileage_report, route_path_report]})

    assert summary.miles == 182.4
    assert summary.geometry.type == "LineString"
    assert summary.geometry.coordinates == route_path_report["Geometry"]["coordinates"]
    assert [(s.label, s.lat, s.lon) for s in summary.stops] == [
        ("Stop 1", 41.8781, -87.6298),
        ("Stop 2", 39.7684, -86.1581),
    ]


def test_array_wrapped_reports(mileage_report, route_path_report):
    wrapped = normalize_reports({"Reports": [mileage_report, route_path_report]})
    bare = normalize_reports([mileage_report, route_path_report])
    assert bare == wrapped


def test_extract_reports_ignores_unknown_shapes():
    assert extract_reports(None) == []
    assert extract_reports("oops") == []
    assert extract_reports({"Reports": None}) == []
    assert extract_reports([{"__type": "x"}, 3, None]) == [{"__type": "x"}]


def test_report_kind_is_a_substring_match():
    assert report_kind({"__type": "MileageReport:http://pcmiler.alk.com/APIs/v1.0"}) is ReportKind.MILEAGE
    assert report_kind({"__type": "RoutePathReport:http://pcmiler.alk.com/APIs/v2.0"}) is ReportKind.ROUTE_PATH
    assert report_kind({"__type": "StateReport"}) is ReportKind.OTHER
    assert report_kind({}) is ReportKind.OTHER


def test_falls_back_to_leg_miles_when_last_total_missing(mileage_report):
    lines = mileage_report["MileageReportLines"]
    lines[0]["LMiles"] = "10.5"
    del lines[-1]["TMiles"]

    summary = normalize_reports([mileage_report])
    assert summary.miles == 10.5 + 182.4


def test_falls_back_to_leg_miles_when_last_total_is_zero(mileage_report):
    mileage_report["MileageReportLines"][-1]["TMiles"] = "0"
    summary = normalize_reports([mileage_report])
    assert summary.miles == 182.4


def test_alternate_lines_field(mileage_report):
    mileage_report["Lines"] = mileage_report.pop("MileageReportLines")
    summary = normalize_reports([mileage_report])
    assert summary.miles == 182.4
    assert len(summary.stops) == 2


def test_empty_mileage_report_defaults():
    summary = normalize_reports([{"__type": "MileageReport", "MileageReportLines": []}])
    assert summary.miles == 0
    assert summary.stops == []
    assert summary.geometry is None


def test_no_reports_defaults():
    summary = normalize_reports({"Reports": []})
    assert summary.miles == 0
    assert summary.stops == []
    assert summary.geometry is None


def test_stops_without_numeric_coordinates_are_dropped(mileage_report):
    lines = mileage_report["MileageReportLines"]
    lines.insert(1, {"Stop": {"Label": "Bad", "Coords": {"Lat": "n/a", "Lon": "-86"}}, "LMiles": "0"})
    lines.insert(1, {"Stop": {"Label": "Missing"}, "LMiles": "0"})

    summary = normalize_reports([mileage_report])
    assert [s.label for s in summary.stops] == ["Stop 1", "Stop 2"]


def test_geo_points_become_a_line_string():
    report = {
        "__type": "RoutePathReport",
        "GeoPoints": [{"Lat": 41.8781, "Lon": -87.6298}, {"Lat": "39.7684", "Lon": "-86.1581"}],
    }
    summary = normalize_reports([report])
    assert summary.geometry.type == "LineString"
    assert summary.geometry.coordinates == [[-87.6298, 41.8781], [-86.1581, 39.7684]]


def test_geometry_preferred_over_geo_points(route_path_report):
    route_path_report["GeoPoints"] = [{"Lat": 1, "Lon": 2}]
    summary = normalize_reports([route_path_report])
    assert summary.geometry.coordinates == route_path_report["Geometry"]["coordinates"]


def test_last_report_of_each_kind_wins(mileage_report):
    later = {
        "__type": "MileageReport",
        "MileageReportLines": [
            {"Stop": {"Label": "Only", "Coords": {"Lat": 1, "Lon": 2}}, "TMiles": 7},
        ],
    }
    first_path = {"__type": "RoutePathReport", "GeoPoints": [{"Lat": 1, "Lon": 2}]}
    second_path = {"__type": "RoutePathReport", "GeoPoints": [{"Lat": 3, "Lon": 4}]}

    summary = normalize_reports([mileage_report, first_path, later, second_path])
    assert summary.miles == 7
    assert [s.label for s in summary.stops] == ["Only"]
    assert summary.geometry.coordinates == [[4.0, 3.0]]


def test_malformed_geometry_points_are_dropped(mileage_report):
    path = {
        "__type": "RoutePathReport",
        "Geometry": {
            "type": "LineString",
            "coordinates": [[-87.6298, 41.8781], [None, 41.2], ["x", "y"], [-87.1], "oops", ["-86.1581", "39.7684"]],
        },
    }
    summary = normalize_reports([mileage_report, path])

    assert summary.miles == 182.4
    assert len(summary.stops) == 2
    assert summary.geometry.coordinates == [[-87.6298, 41.8781], [-86.1581, 39.7684]]


def test_mileage_lines_with_odd_stop_shapes_are_dropped(mileage_report):
    lines = mileage_report["MileageReportLines"]
    lines.insert(1, {"Stop": "Stop X", "LMiles": "0"})
    lines.insert(1, {"Stop": {"Label": "Stop Y", "Coords": "41.8,-87.6"}, "LMiles": "0"})

    summary = normalize_reports([mileage_report])
    assert summary.miles == 182.4
    assert [s.label for s in summary.stops] == ["Stop 1", "Stop 2"]
