"""Integration tests for the notification endpoints and websocket channel."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from main import create_app
from mindmend.infrastructure.notifications import connection_registry
from tests.conftest import auth_headers


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def _ws_url(user) -> str:
    token = auth_headers(user)["Authorization"].split(" ", 1)[1]
    return f"/notifications/ws?token={token}"


def _request_booking(client: TestClient, patient, therapist) -> dict:
    response = client.post(
        "/bookings/",
        json={
            "therapist_id": therapist.id,
            "scheduled_date": "2026-03-02",
            "scheduled_time": "10:30",
        },
        headers=auth_headers(patient),
    )
    assert response.status_code == 201
    return response.json()


def test_list_requires_authentication(client: TestClient) -> None:
    assert client.get("/notifications/").status_code == 401


def test_offline_booking_request_is_listed_later(client: TestClient, patient, therapist) -> None:
    booking = _request_booking(client, patient, therapist)

    response = client.get("/notifications/", headers=auth_headers(therapist))

    assert response.status_code == 200
    items = response.json()
    assert len(items) == 1
    assert items[0]["type"] == "booking_request"
    assert items[0]["title"] == "New Booking Request"
    assert items[0]["read"] is False
    assert items[0]["link"] == "/therapist/appointments"
    assert items[0]["data"] == {"booking_id": booking["id"]}
    assert client.get("/notifications/", headers=auth_headers(patient)).json() == []


def test_joined_connection_receives_the_push(client: TestClient, patient, therapist) -> None:
    booking = _request_booking(client, patient, therapist)

    with client.websocket_connect(_ws_url(patient)) as websocket:
        websocket.send_json({"type": "join_user", "user_id": patient.id})
        assert websocket.receive_json() == {"type": "joined", "user_id": patient.id}

        response = client.put(
            f"/bookings/{booking['id']}/status",
            json={"status": "confirmed"},
            headers=auth_headers(therapist),
        )
        assert response.status_code == 200

        event = websocket.receive_json()

    assert event["type"] == "notification_received"
    assert event["data"]["type"] == "booking_confirmed"
    assert event["data"]["title"] == "Booking Confirmed!"
    stored = client.get("/notifications/", headers=auth_headers(patient)).json()
    assert len(stored) == 1
    for key in ("id", "recipient_id", "type", "title", "message", "read", "link", "data"):
        assert event["data"][key] == stored[0][key]


def test_connection_that_never_joined_gets_nothing(client: TestClient, patient, therapist) -> None:
    with client.websocket_connect(_ws_url(therapist)) as websocket:
        _request_booking(client, patient, therapist)
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}


def test_cannot_join_another_users_channel(client: TestClient, patient, therapist) -> None:
    with client.websocket_connect(_ws_url(patient)) as websocket:
        websocket.send_json({"type": "join_user", "user_id": therapist.id})
        reply = websocket.receive_json()

    assert reply["type"] == "error"
    assert connection_registry.connections_for(therapist.id) == []


def test_websocket_rejects_invalid_token(client: TestClient) -> None:
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/notifications/ws?token=garbage") as websocket:
            websocket.receive_json()


def test_mark_read_is_idempotent_and_scoped(client: TestClient, patient, therapist) -> None:
    _request_booking(client, patient, therapist)
    notification_id = client.get("/notifications/", headers=auth_headers(therapist)).json()[0]["id"]

    for _ in range(2):
        response = client.put(
            f"/notifications/{notification_id}/read", headers=auth_headers(therapist)
        )
        assert response.status_code == 200
        assert response.json()["read"] is True

    response = client.put(f"/notifications/{notification_id}/read", headers=auth_headers(patient))
    assert response.status_code == 404


def test_mark_all_read_then_list(client: TestClient, patient, therapist) -> None:
    _request_booking(client, patient, therapist)
    _request_booking(client, patient, therapist)

    response = client.put("/notifications/read-all", headers=auth_headers(therapist))

    assert response.status_code == 200
    assert response.json() == {"updated": 2}
    items = client.get("/notifications/", headers=auth_headers(therapist)).json()
    assert len(items) == 2
    assert all(item["read"] is True for item in items)
