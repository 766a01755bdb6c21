from app.db import models
from app.services import booking_service
from conftest import create_schedule


def booking_payload(schedule_id, **overrides):
    payload = {
        "scheduleId": schedule_id,
        "passengerName": "Ali Raza",
        "passengerEmail": "ali@example.com",
        "passengerPhone": "03001234567",
        "seats": 2,
        "amount": 200,
    }
    payload.update(overrides)
    return payload


def seed_schedule(session_factory, **kwargs):
    with session_factory() as session:
        return create_schedule(session, **kwargs).id


def test_create_booking(api_client):
    client, session_factory = api_client
    schedule_id = seed_schedule(session_factory, capacity=10)

    response = client.post("/api/bookings", json=booking_payload(schedule_id))

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Booking created"
    assert len(body["pnr"]) == 8
    with session_factory() as session:
        booking = session.get(models.Booking, body["bookingId"])
        assert booking.pnr == body["pnr"]
        assert booking.seats == 2
        assert booking.status == models.BookingStatus.confirmed


def test_create_booking_missing_fields(api_client):
    client, session_factory = api_client
    schedule_id = seed_schedule(session_factory)
    payload = booking_payload(schedule_id)
    del payload["passengerName"]

    response = client.post("/api/bookings", json=payload)

    assert response.status_code == 400
    assert "error" in response.json()


def test_create_booking_rejects_zero_seats(api_client):
    client, session_factory = api_client
    schedule_id = seed_schedule(session_factory)

    response = client.post("/api/bookings", json=booking_payload(schedule_id, seats=0))

    assert response.status_code == 400


def test_create_booking_over_capacity(api_client):
    client, session_factory = api_client
    schedule_id = seed_schedule(session_factory, capacity=3)
    assert client.post("/api/bookings", json=booking_payload(schedule_id)).status_code == 201

    response = client.post("/api/bookings", json=booking_payload(schedule_id))

    assert response.status_code == 400
    assert response.json() == {"error": "Not enough seats available"}
    with session_factory() as session:
        assert session.query(models.Booking).count() == 1


def test_create_booking_amount_mismatch(api_client):
    client, session_factory = api_client
    schedule_id = seed_schedule(session_factory, price=2500)

    response = client.post("/api/bookings", json=booking_payload(schedule_id, amount=100))

    assert response.status_code == 400
    assert "expected 5000.00" in response.json()["error"]


def test_create_booking_unknown_schedule(api_client):
    client, _ = api_client

    response = client.post("/api/bookings", json=booking_payload(999))

    assert response.status_code == 404
    assert response.json() == {"error": "Schedule not found"}


def test_storage_failure_is_reported_as_server_error(api_client, monkeypatch):
    client, session_factory = api_client
    schedule_id = seed_schedule(session_factory)

    def unavailable(*args, **kwargs):
        raise booking_service.StorageUnavailable("Storage unavailable, please retry")

    monkeypatch.setattr(booking_service, "create_booking", unavailable)

    response = client.post("/api/bookings", json=booking_payload(schedule_id))

    assert response.status_code == 500
    assert response.json() == {"error": "Storage unavailable, please retry"}


def test_reference_collision_is_reported_as_server_error(api_client, monkeypatch):
    client, session_factory = api_client
    schedule_id = seed_schedule(session_factory)
    monkeypatch.setattr(booking_service, "generate_pnr", lambda: "AAAA1111")
    assert client.post("/api/bookings", json=booking_payload(schedule_id)).status_code == 201

    response = client.post("/api/bookings", json=booking_payload(schedule_id, seats=1, amount=100))

    assert response.status_code == 500
    assert "unique PNR" in response.json()["error"]


def test_list_bookings_by_email(api_client):
    client, session_factory = api_client
    schedule_id = seed_schedule(session_factory, capacity=10)
    first = client.post("/api/bookings", json=booking_payload(schedule_id)).json()
    second = client.post(
        "/api/bookings", json=booking_payload(schedule_id, seats=1, amount=100)
    ).json()
    client.post(
        "/api/bookings",
        json=booking_payload(schedule_id, passengerEmail="sara@example.com", seats=1, amount=100),
    )

    response = client.get("/api/bookings", params={"email": "ali@example.com"})

    assert response.status_code == 200
    bookings = response.json()["bookings"]
    assert [booking["pnr"] for booking in bookings] == [second["pnr"], first["pnr"]]
    latest = bookings[0]
    assert latest["status"] == "Confirmed"
    assert latest["fromCity"] == "Karachi"
    assert latest["toCity"] == "Lahore"
    assert latest["busName"] == "Daewoo Express"
    assert latest["departureTime"].startswith("2030-03-14T08:00")
    assert latest["amount"] == 100.0


def test_list_bookings_unknown_email(api_client):
    client, _ = api_client

    response = client.get("/api/bookings", params={"email": "nobody@example.com"})

    assert response.status_code == 200
    assert response.json() == {"bookings": []}


def test_list_bookings_requires_email(api_client):
    client, _ = api_client

    response = client.get("/api/bookings")

    assert response.status_code == 400
    assert "error" in response.json()


def test_get_booking_by_pnr(api_client):
    client, session_factory = api_client
    schedule_id = seed_schedule(session_factory)
    created = client.post("/api/bookings", json=booking_payload(schedule_id)).json()

    response = client.get(f"/api/bookings/{created['pnr'].lower()}")

    assert response.status_code == 200
    assert response.json()["id"] == created["bookingId"]
    assert client.get("/api/bookings/00000000").status_code == 404


def test_cancel_booking_by_pnr(api_client):
    client, session_factory = api_client
    schedule_id = seed_schedule(session_factory, capacity=2)
    created = client.post("/api/bookings", json=booking_payload(schedule_id)).json()

    wrong = client.post(
        f"/api/bookings/{created['pnr']}/cancel", json={"passengerEmail": "sara@example.com"}
    )
    assert wrong.status_code == 404

    response = client.post(
        f"/api/bookings/{created['pnr']}/cancel", json={"passengerEmail": "ALI@example.com"}
    )

    assert response.status_code == 200
    assert response.json()["status"] == "Cancelled"
    assert response.json()["cancelledAt"] is not None
    availability = client.get(f"/api/schedules/{schedule_id}/availability").json()
    assert availability["availableSeats"] == 2

    again = client.post(
        f"/api/bookings/{created['pnr']}/cancel", json={"passengerEmail": "ali@example.com"}
    )
    assert again.status_code == 400
    assert again.json() == {"error": "Cannot cancel"}


def test_unknown_schedules_do_not_grow_lock_registry(api_client):
    client, _ = api_client
    before = len(booking_service._schedule_locks)

    for schedule_id in range(900000, 900100):
        response = client.post("/api/bookings", json=booking_payload(schedule_id))
        assert response.status_code == 404

    assert len(booking_service._schedule_locks) == before


def test_list_and_cancel_agree_on_email_case(api_client):
    client, session_factory = api_client
    schedule_id = seed_schedule(session_factory)
    created = client.post(
        "/api/bookings", json=booking_payload(schedule_id, passengerEmail="Ali@X.io")
    ).json()

    listed = client.get("/api/bookings", params={"email": "ali@x.io"}).json()["bookings"]
    assert [booking["pnr"] for booking in listed] == [created["pnr"]]

    cancelled = client.post(
        f"/api/bookings/{created['pnr']}/cancel", json={"passengerEmail": "ali@x.io"}
    )
    assert cancelled.status_code == 200


def test_create_booking_rejects_oversized_numbers(api_client):
    client, session_factory = api_client
    schedule_id = seed_schedule(session_factory)

    huge_seats = client.post(
        "/api/bookings", json=booking_payload(schedule_id, seats=10**6, amount=100)
    )
    huge_schedule = client.post("/api/bookings", json=booking_payload(10**20))

    assert huge_seats.status_code == 400
    assert "seats" in huge_seats.json()["error"]
    assert huge_schedule.status_code == 400
    assert "scheduleId" in huge_schedule.json()["error"]
