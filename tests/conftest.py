import pytest
import requests
from fastapi.testclient import TestClient

import config
from main import app


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, text="", content=b"", headers=None):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self._json = json_data
        self.text = text
        self.content = content
        self.headers = headers or {}

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


class FakeUpstream:
    """Stands in for requests.post, answering by URL path and recording every call."""

    def __init__(self):
        self.calls = []
        self.responses = {}

    def respond(self, path_suffix, response):
        self.responses[path_suffix] = response

    def __call__(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        for suffix, response in self.responses.items():
            if url.endswith(suffix):
                if isinstance(response, Exception):
                    raise response
                return response
        raise AssertionError(f"Unexpected outbound call to {url}")


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()
    monkeypatch.setattr(requests, "post", fake)
    return fake


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(config, "TRIMBLE_API_KEY", "server-key")
    return "server-key"


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setattr(config, "TRIMBLE_API_KEY", "")


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def mileage_report():
    return {
        "__type": "MileageReport:http://pcmiler.alk.com/APIs/v1.0",
        "ReportLines": [],
        "MileageReportLines": [
            {
                "Stop": {"Label": "Stop 1", "Coords": {"Lat": "41.878100", "Lon": "-87.629800"}},
                "LMiles": "0.000",
                "TMiles": "0.000",
            },
            {
                "Stop": {"Label": "Stop 2", "Coords": {"Lat": "39.768400", "Lon": "-86.158100"}},
                "LMiles": "182.400",
                "TMiles": "182.400",
            },
        ],
    }


@pytest.fixture
def route_path_report():
    return {
        "__type": "RoutePathReport:http://pcmiler.alk.com/APIs/v1.0",
        "Geometry": {
            "type": "LineString",
            "coordinates": [[-87.6298, 41.8781], [-87.1, 41.2], [-86.1581, 39.7684]],
        },
    }
