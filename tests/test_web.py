import json
from datetime import timedelta
from wsgiref.util import setup_testing_defaults

import pytest

from subpar.batch import Batch
from subpar.ids import StopId
from subpar.schedule import Schedule, StopPlan, Times
from subpar.states import States
from subpar.timestamp import Date, Timestamp
from subpar.trip import TripId
from subpar.web import WebApp

COMPLEXES = [
    {
        "complex_id": 1,
        "stop_name": "Test Street",
        "ada": 1,
        "ada_notes": None,
        "latitude": 40.5,
        "longitude": -73.9,
        "routes": ["L"],
        "stop_ids": ["101"],
    }
]
EQUIPMENT = [
    {
        "equipmentno": "EL001",
        "complex_id": 1,
        "equipmenttype": "EL",
        "isactive": True,
        "ada": True,
        "serving": "street to platform",
        "linesservedbyelevator": ["L"],
        "shortdescription": "elevator",
        "busconnections": "",
        "alternativeroute": "",
    }
]
OUTAGES = [
    {
        "equipment": "EL001",
        "outagedate": "2024-01-01T08:00:00-05:00",
        "ada": True,
        "estimatedreturntoservice": "2024-01-02T08:00:00-05:00",
        "reason": "Repair",
        "isupcomingoutage": False,
        "ismaintenanceoutage": False,
    }
]


@pytest.fixture
def states():
    return States(COMPLEXES, EQUIPMENT, OUTAGES, [])


@pytest.fixture
def app(states, tmp_path):
    return WebApp(states, tmp_path)


def call(app, path, method="GET"):
    environ = {}
    setup_testing_defaults(environ)
    environ["PATH_INFO"] = path
    environ["REQUEST_METHOD"] = method
    captured = {}

    def start_response(status, headers):
        captured["status"] = status
        captured["headers"] = dict(headers)

    body = b"".join(app(environ, start_response))
    return captured["status"], captured["headers"], body


def schedule_batch():
    trip = TripId.parse("134200_L..N", Date.make(2024, 1, 1))
    arrival = Timestamp.now() + timedelta(minutes=5)
    plan = StopPlan(StopId("101N"), Times(arrival, None))
    schedule = Schedule(trip=trip, asof=Timestamp.epoch(), stops=[plan])
    return Batch(time=Timestamp.now(), msgs=[schedule]), arrival


def test_elevators_lists_equipment_with_outage(app):
    status, headers, body = call(app, "/elevators/1")
    assert status == "200 OK"
    assert headers["Content-Type"] == "application/json"
    data = json.loads(body)
    assert [e["id"] for e in data] == ["EL001"]
    assert data[0]["outage"]["reason"] == "Repair"


def test_elevators_unknown_complex(app):
    status, _, body = call(app, "/elevators/99")
    assert status == "404 Not Found"
    assert body == b"complex '99' not found"


def test_non_numeric_id_is_bad_request(app):
    status, _, _ = call(app, "/elevators/abc")
    assert status == "400 Bad Request"


def test_overview_lists_complexes_with_outages(app):
    status, _, body = call(app, "/elevators_overview")
    assert status == "200 OK"
    assert json.loads(body) == {"outages": [1]}


def test_upcoming_missing_until_first_update(app, states):
    assert call(app, "/upcoming/1")[0] == "404 Not Found"
    states.trains.update(Batch(time=Timestamp.now()))
    status, _, body = call(app, "/upcoming/1")
    assert status == "200 OK"
    assert json.loads(body) == []


def test_upcoming_after_schedule(app, states):
    batch, _ = schedule_batch()
    states.trains.update(batch)
    data = json.loads(call(app, "/upcoming/1")[2])
    assert len(data) == 1
    assert data[0]["trip"] == "134200_L..N"
    assert data[0]["stop"] == "101"


def test_complex_full(app, states):
    assert call(app, "/complex/1")[0] == "404 Not Found"
    batch, _ = schedule_batch()
    states.trains.update(batch)
    status, _, body = call(app, "/complex/1")
    assert status == "200 OK"
    data = json.loads(body)
    assert data["meta"]["name"] == "Test Street"
    assert [e["id"] for e in data["elevators"]] == ["EL001"]
    assert len(data["upcoming"]) == 1


def test_complex_page_served_from_ui_dir(app, tmp_path):
    assert call(app, "/c/1")[0] == "404 Not Found"
    (tmp_path / "index.html").write_text("<html>page</html>", encoding="utf-8")
    status, headers, body = call(app, "/c/1")
    assert status == "200 OK"
    assert body == b"<html>page</html>"
    assert headers["Content-Type"].startswith("text/html")


def test_file_route(app, tmp_path):
    (tmp_path / "app.js").write_text("let x = 1;", encoding="utf-8")
    assert call(app, "/f/app.js")[2] == b"let x = 1;"
    assert call(app, "/f/missing.js")[0] == "404 Not Found"
    assert call(app, "/f/..secret")[0] == "400 Bad Request"


def test_hello(app):
    assert call(app, "/hello")[2] == b"hell world"


def test_unknown_path_and_method(app):
    assert call(app, "/nothing/here")[0] == "404 Not Found"
    assert call(app, "/elevators/")[0] == "404 Not Found"
    status, headers, _ = call(app, "/hello", method="POST")
    assert status == "405 Method Not Allowed"
    assert "GET" in headers["Allow"]


def test_head_has_empty_body(app):
    status, headers, body = call(app, "/hello", method="HEAD")
    assert status == "200 OK"
    assert body == b""
    assert headers["Content-Length"] == str(len(b"hell world"))


def test_cors_headers(app):
    assert "Access-Control-Allow-Origin" not in call(app, "/hello")[1]
    app.allowed_origin = "https://example.com"
    headers = call(app, "/hello")[1]
    assert headers["Access-Control-Allow-Origin"] == "https://example.com"
    assert headers["Access-Control-Allow-Methods"] == "GET"