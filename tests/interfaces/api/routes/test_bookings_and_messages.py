"""Integration tests for the domain actions that emit notifications."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from main import create_app
from tests.conftest import auth_headers


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def test_register_login_and_profile(client: TestClient) -> None:
    payload = {
        "name": "Dana Doctor",
        "email": "Dana@Example.com",
        "password": "Secret123",
        "role": "therapist",
    }

    created = client.post("/users/", json=payload)
    assert created.status_code == 201
    assert created.json()["email"] == "dana@example.com"
    assert client.post("/users/", json=payload).status_code == 400

    token = client.post(
        "/auth/token", data={"username": "dana@example.com", "password": "Secret123"}
    )
    assert token.status_code == 200
    access_token = token.json()["access_token"]

    me = client.get("/users/me", headers={"Authorization": f"Bearer {access_token}"})
    assert me.status_code == 200
    assert me.json()["role"] == "therapist"

    wrong = client.post("/auth/token", data={"username": "dana@example.com", "password": "nope"})
    assert wrong.status_code == 401


def test_booking_requires_a_therapist(client: TestClient, patient) -> None:
    response = client.post(
        "/bookings/",
        json={"therapist_id": patient.id, "scheduled_date": "2026-03-02", "scheduled_time": "10:00"},
        headers=auth_headers(patient),
    )

    assert response.status_code == 400


def test_rejection_notifies_patient_with_system_type(client: TestClient, patient, therapist) -> None:
    booking = client.post(
        "/bookings/",
        json={"therapist_id": therapist.id, "scheduled_date": "2026-03-02", "scheduled_time": "10:00"},
        headers=auth_headers(patient),
    ).json()

    response = client.put(
        f"/bookings/{booking['id']}/status",
        json={"status": "rejected"},
        headers=auth_headers(therapist),
    )

    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    items = client.get("/notifications/", headers=auth_headers(patient)).json()
    assert [(item["type"], item["title"]) for item in items] == [("system", "Booking Declined")]


def test_patient_cannot_confirm_their_own_booking(client: TestClient, patient, therapist) -> None:
    booking = client.post(
        "/bookings/",
        json={"therapist_id": therapist.id, "scheduled_date": "2026-03-02", "scheduled_time": "10:00"},
        headers=auth_headers(patient),
    ).json()

    confirm = client.put(
        f"/bookings/{booking['id']}/status",
        json={"status": "confirmed"},
        headers=auth_headers(patient),
    )
    cancel = client.put(
        f"/bookings/{booking['id']}/status",
        json={"status": "cancelled"},
        headers=auth_headers(patient),
    )
    unknown = client.put(
        f"/bookings/{booking['id']}/status",
        json={"status": "archived"},
        headers=auth_headers(therapist),
    )

    assert confirm.status_code == 403
    assert cancel.status_code == 200
    assert unknown.status_code == 422
    assert client.put(
        "/bookings/999/status", json={"status": "confirmed"}, headers=auth_headers(therapist)
    ).status_code == 404


def test_message_pushes_event_and_notification(client: TestClient, patient, therapist) -> None:
    token = auth_headers(patient)["Authorization"].split(" ", 1)[1]
    content = "x" * 60

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        websocket.send_json({"type": "join_user", "user_id": str(patient.id)})
        assert websocket.receive_json()["type"] == "joined"

        response = client.post(
            "/messages/",
            json={"recipient_id": patient.id, "content": content},
            headers=auth_headers(therapist),
        )
        assert response.status_code == 201

        first = websocket.receive_json()
        second = websocket.receive_json()

    assert first["type"] == "new_message"
    assert first["data"]["content"] == content
    assert second["type"] == "notification_received"
    assert second["data"]["type"] == "new_message"
    assert second["data"]["title"] == "New Message from Theo Therapist"
    assert second["data"]["message"] == "x" * 50 + "..."
    assert second["data"]["link"] == "/patient/chat"

    conversation = client.get(f"/messages/{therapist.id}", headers=auth_headers(patient))
    assert [item["content"] for item in conversation.json()] == [content]


def test_prescription_is_therapist_only_and_notifies_the_patient(
    client: TestClient, patient, therapist
) -> None:
    payload = {
        "recipient_id": patient.id,
        "medications": [{"name": "Sertraline", "dosage": "50mg", "frequency": "daily"}],
        "diagnosis": "Generalised anxiety",
    }

    forbidden = client.post(
        "/messages/prescriptions",
        json={**payload, "recipient_id": therapist.id},
        headers=auth_headers(patient),
    )
    assert forbidden.status_code == 403

    response = client.post("/messages/prescriptions", json=payload, headers=auth_headers(therapist))

    assert response.status_code == 201
    body = response.json()
    assert body["message_type"] == "prescription"
    assert body["prescription"]["medications"][0]["name"] == "Sertraline"
    assert body["prescription"]["prescribed_at"]

    (notification,) = client.get("/notifications/", headers=auth_headers(patient)).json()
    assert notification["type"] == "new_message"
    assert notification["title"] == "New Prescription"
    assert notification["message"] == "Dr. Theo Therapist has sent you a new prescription."
    assert notification["link"] == "/patient/chat"
