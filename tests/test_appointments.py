from datetime import datetime, timedelta

from arogyamix.database import SessionLocal
from arogyamix.models.appointment import Appointment


def _booking(days_ahead: int = 2, **overrides):
    when = datetime.utcnow() + timedelta(days=days_ahead)
    body = {
        "title": "Nutrition planning",
        "description": "Discuss millet-based diet",
        "appointment_date": when.date().isoformat(),
        "appointment_time": "10:30",
        "appointment_type": "nutrition",
    }
    body.update(overrides)
    return body


def test_book_appointment_assigns_static_meeting_link(client, auth_headers):
    response = client.post("/appointments", headers=auth_headers, json=_booking())

    assert response.status_code == 201
    payload = response.json()["data"]
    assert payload["status"] == "scheduled"
    assert payload["google_meet_link"] == "https://meet.google.com/new"
    assert payload["duration_minutes"] == 30
    assert payload["appointment_type_label"] == "Nutrition"


def test_past_booking_is_rejected_before_write(client, auth_headers):
    response = client.post("/appointments", headers=auth_headers, json=_booking(days_ahead=-1))

    assert response.status_code == 400
    assert response.json()["message"] == "Appointment date must be in the future"

    listing = client.get("/appointments", headers=auth_headers).json()["data"]
    assert listing["count"] == 0


def test_missing_fields_are_rejected(client, auth_headers):
    response = client.post("/appointments", headers=auth_headers, json=_booking(appointment_type=""))

    assert response.status_code == 400
    assert response.json()["message"] == "Please fill in all required fields"


def test_list_is_ordered_and_split(client, auth_headers):
    client.post("/appointments", headers=auth_headers, json=_booking(days_ahead=5, title="Later"))
    client.post(
        "/appointments",
        headers=auth_headers,
        json=_booking(days_ahead=3, title="Sooner", appointment_type="follow-up"),
    )

    session = SessionLocal()
    try:
        later = session.query(Appointment).filter(Appointment.title == "Later").one()
        later.status = "cancelled"
        session.commit()
    finally:
        session.close()

    payload = client.get("/appointments", headers=auth_headers).json()["data"]
    assert [item["title"] for item in payload["appointments"]] == ["Sooner", "Later"]
    assert [item["title"] for item in payload["upcoming"]] == ["Sooner"]
    assert [item["title"] for item in payload["past"]] == ["Later"]
    assert payload["upcoming"][0]["appointment_type_label"] == "Follow Up"


def test_appointments_are_owned_by_their_user(client, login):
    asha = login()
    ravi = login(email="ravi@example.com", full_name="Ravi Kumar")
    booked = client.post("/appointments", headers=asha, json=_booking()).json()["data"]

    assert client.get("/appointments", headers=ravi).json()["data"]["count"] == 0
    assert client.get(f"/appointments/{booked['id']}/join", headers=ravi).status_code == 404

    joined = client.get(f"/appointments/{booked['id']}/join", headers=asha)
    assert joined.status_code == 200
    assert joined.json()["data"]["google_meet_link"] == "https://meet.google.com/new"


def test_join_refuses_non_meeting_links(client, auth_headers):
    booked = client.post("/appointments", headers=auth_headers, json=_booking()).json()["data"]

    session = SessionLocal()
    try:
        appointment = session.get(Appointment, booked["id"])
        appointment.google_meet_link = "http://evil.com"
        session.commit()
    finally:
        session.close()

    response = client.get(f"/appointments/{booked['id']}/join", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid meeting link"
