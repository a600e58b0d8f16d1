from __future__ import annotations

import io
import json

import pytest
from flask import Flask

from src.work_tracker.work_tracker.container import build_container
from src.work_tracker.work_tracker.tracker.controller import register


@pytest.fixture
def client(store, clock):
    app = Flask(__name__)
    app.config["TESTING"] = True
    register(app, build_container(store=store, default_timezone="UTC", clock=clock))
    return app.test_client()


def _start(client, when="2024-03-04T09:00:00Z"):
    return client.post("/api/punches", json={"type": "start", "timestamp": when})


def test_create_punch(client):
    resp = _start(client)
    body = resp.get_json()

    assert resp.status_code == 201
    assert body["success"] is True
    assert body["record"]["time"] == "09:00"
    assert body["message"] == "Start of day saved"


def test_create_punch_with_manual_time(client):
    resp = client.post("/api/punches", json={"type": "start", "manual_time": "07:45"})
    assert resp.get_json()["record"]["time"] == "07:45"
    assert resp.get_json()["justification_suggested"] is False


@pytest.mark.parametrize(
    "body, status",
    [
        ({"type": "lunch"}, 400),
        ({"type": "start", "timestamp": "not-a-date"}, 400),
        ({"type": "break_end"}, 409),
    ],
)
def test_create_punch_errors(client, body, status):
    resp = client.post("/api/punches", json=body)
    assert resp.status_code == status
    assert resp.get_json()["success"] is False


def test_update_and_delete(client):
    punch_id = _start(client).get_json()["record"]["id"]

    resp = client.patch(f"/api/punches/{punch_id}", json={"justification": "dentist", "time": "10:00"})
    assert resp.status_code == 200
    assert resp.get_json()["record"]["justification"] == "dentist"

    assert client.patch("/api/punches/1", json={"justification": "x"}).status_code == 404
    assert client.delete(f"/api/punches/{punch_id}").status_code == 400

    resp = client.delete(f"/api/punches/{punch_id}?confirm=1")
    assert resp.get_json() == {"success": True, "deleted": True}
    assert client.delete(f"/api/punches/{punch_id}?confirm=1").get_json()["deleted"] is False


def test_status_history_and_statistics(client):
    _start(client)

    status = client.get("/api/status").get_json()["status"]
    assert status["status"] == "WORKING"
    assert client.get("/api/status?date=2024-13-01").status_code == 400

    history = client.get("/api/history?period=all&page=99").get_json()["history"]
    assert history["page"] == 1
    assert history["days"][0]["date"] == "2024-03-04"

    stats = client.get("/api/statistics?period=week").get_json()["statistics"]
    assert stats["period"] == "week"


def test_settings_roundtrip(client):
    assert client.get("/api/settings").get_json()["settings"]["dailyHours"] == 8

    resp = client.put("/api/settings", json={"dailyHours": 7.5, "holidays": ["2024-12-25"]})
    assert resp.status_code == 200
    assert resp.get_json()["settings"]["holidays"] == ["2024-12-25"]

    assert client.put("/api/settings", json={"dailyHours": -1}).status_code == 400
    assert client.put("/api/settings", json=[1]).status_code == 400


def test_refresh(client):
    body = client.get("/api/refresh").get_json()
    assert body["now"] == "2024-03-04T09:00:00+00:00"
    assert body["journey"] is None


def test_export_and_import(client):
    _start(client)

    exported = client.get("/api/export")
    assert exported.headers["Content-Disposition"] == "attachment; filename=time_tracker_2024-03-04.json"
    records = json.loads(exported.data)
    assert len(records) == 1

    assert client.post("/api/import", data=exported.data).status_code == 400

    upload = {"file": (io.BytesIO(exported.data), "backup.json")}
    resp = client.post("/api/import?confirm=1", data=upload, content_type="multipart/form-data")
    assert resp.get_json() == {"success": True, "imported": 1}

    resp = client.post("/api/import?confirm=1", data=b"{broken", content_type="application/json")
    assert resp.status_code == 400
