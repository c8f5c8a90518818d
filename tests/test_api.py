import pytest
from fastapi.testclient import TestClient

from placepicker.api.app import create_app
from placepicker.core.config import settings
from placepicker.core.errors import ServerError
from placepicker.providers.base import PermissionStatus, Position

API_KEY = "test-key"
HEADERS = {"X-API-Key": API_KEY}


@pytest.fixture
def client(monkeypatch, geocoder, positions):
    monkeypatch.setattr(settings, "api_key", API_KEY)
    with TestClient(create_app(geocoder=geocoder, positions=positions)) as c:
        yield c


def test_requests_without_key_are_rejected(client):
    assert client.get("/v1/history").status_code == 401
    assert client.get("/v1/history", headers={"X-API-Key": "wrong"}).status_code == 401


def test_search_serializes_locations(client, geocoder, amsterdam):
    geocoder.search_results["amsterdam"] = [amsterdam]

    resp = client.get("/v1/locations/search", params={"q": "amsterdam"}, headers=HEADERS)

    assert resp.status_code == 200
    body = resp.json()
    assert body["query"] == "amsterdam"
    assert body["results"][0]["latitude"] == amsterdam.latitude
    assert body["results"][0]["city"] == "Amsterdam"
    assert body["results"][0]["bounds"] is None


def test_empty_search_returns_no_results(client, geocoder):
    resp = client.get("/v1/locations/search", headers=HEADERS)
    assert resp.json() == {"query": "", "results": []}
    assert geocoder.calls == []


def test_reverse_without_coverage_is_404(client, geocoder):
    geocoder.reverse_result = None
    resp = client.get("/v1/locations/reverse", params={"lat": 0, "lon": -140}, headers=HEADERS)
    assert resp.status_code == 404


def test_reverse_rejects_out_of_range_coordinates(client):
    resp = client.get("/v1/locations/reverse", params={"lat": 123, "lon": 4}, headers=HEADERS)
    assert resp.status_code == 422


def test_initial_location_reports_resolving_step(client, geocoder, positions, utrecht):
    positions.last_known = Position(lat=52.09, lon=5.12)
    geocoder.reverse_result = utrecht

    body = client.get("/v1/locations/initial", headers=HEADERS).json()

    assert body["resolved_by"] == "last_known_position"
    assert body["location"]["display_name"] == "Utrecht"


def test_current_location_with_services_disabled_is_503(client, positions):
    positions.enabled = False
    resp = client.post("/v1/locations/current", headers=HEADERS)
    assert resp.status_code == 503
    assert resp.json()["detail"]["kind"] == "services_disabled"


@pytest.mark.parametrize(
    "checked, requested, kind",
    [
        (PermissionStatus.DENIED, PermissionStatus.DENIED, "permission_denied"),
        (PermissionStatus.DENIED, PermissionStatus.DENIED_FOREVER, "permission_denied_forever"),
        (PermissionStatus.DENIED_FOREVER, PermissionStatus.GRANTED, "permission_denied_forever"),
    ],
)
def test_current_location_without_permission_is_403(client, positions, checked, requested, kind):
    positions.permission = checked
    positions.requested_permission = requested
    resp = client.post("/v1/locations/current", headers=HEADERS)
    assert resp.status_code == 403
    assert resp.json()["detail"]["kind"] == kind


def test_initial_location_when_every_lookup_fails_is_502(client, geocoder, positions):
    positions.last_known = Position(lat=52.09, lon=5.12)
    geocoder.reverse_error = ServerError(500)
    geocoder.country_error = ServerError(502)

    resp = client.get("/v1/locations/initial", headers=HEADERS)

    assert resp.status_code == 502
    assert resp.json()["detail"] == "Server error: 502"


def test_initial_location_when_device_lookup_fails_is_503(monkeypatch, geocoder, positions):
    monkeypatch.setattr(settings, "api_key", API_KEY)
    # No region, so the device lookup is the only step that runs.
    monkeypatch.setattr(settings, "locale", "en")
    positions.last_known_error = RuntimeError("no location hardware")

    with TestClient(create_app(geocoder=geocoder, positions=positions)) as c:
        resp = c.get("/v1/locations/initial", headers=HEADERS)

    assert resp.status_code == 503
    assert "no location hardware" in resp.json()["detail"]
    assert geocoder.calls == []


def test_selecting_builds_history(client, amsterdam, utrecht):
    payload = {"latitude": amsterdam.latitude, "longitude": amsterdam.longitude, "display_name": "Amsterdam"}
    client.post("/v1/history", json=payload, headers=HEADERS)
    client.post("/v1/history", json={"latitude": 52.09, "longitude": 5.12, "display_name": "Utrecht"}, headers=HEADERS)
    resp = client.post("/v1/history", json=payload, headers=HEADERS)

    names = [item["display_name"] for item in resp.json()["items"]]
    assert names == ["Amsterdam", "Utrecht"]
    assert client.get("/v1/history", headers=HEADERS).json() == resp.json()
