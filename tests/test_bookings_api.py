"""HTTP tests for the booking routes."""

import pytest

from app.core.config import DEFAULT_HOUR_CATALOGUE
from conftest import ADMIN_EMAIL, hour_labels, hour_map, make_booking


async def create_booking(client, **kwargs):
    response = await client.post("/bookings", json=make_booking(**kwargs))
    assert response.status_code == 201
    return response.json()["booking"]


@pytest.mark.asyncio
async def test_create_booking_on_fresh_date(client, day_store, transport):
    response = await client.post("/bookings", json=make_booking(date="2025-06-01", hours="2 Hours/$70"))

    assert response.status_code == 201
    body = response.json()
    assert body["booking"]["status"] == "unconfirmed"
    assert body["booking"]["date"] == "2025-06-01"
    assert body["emailStatus"]["customer"]["sent"] is True
    assert body["emailStatus"]["admin"]["sent"] is True
    assert body["message"] == "Booking created successfully"

    day = await day_store.find_by_date("2025-06-01")
    assert day["disabled"] is False
    assert day["hours"] == []
    assert len(transport.sent_to(ADMIN_EMAIL)) == 1


@pytest.mark.asyncio
async def test_create_booking_reports_email_failure(client, transport):
    transport.fail_for.add(ADMIN_EMAIL)

    response = await client.post("/bookings", json=make_booking())

    assert response.status_code == 201
    assert response.json()["emailStatus"]["admin"]["sent"] is False


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["name", "email", "phoneNumber", "date", "hours"])
async def test_create_booking_requires_fields(client, missing):
    body = make_booking()
    del body[missing]

    response = await client.post("/bookings", json=body)

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_create_booking_rejects_unknown_hours(client):
    response = await client.post("/bookings", json=make_booking(hours="6 Hours/$200"))

    assert response.status_code == 400
    assert "Unknown hours option" in response.json()["error"]


@pytest.mark.asyncio
async def test_list_and_get_bookings(client):
    first = await create_booking(client, date="2025-06-02")
    second = await create_booking(client, date="2025-06-01", name="Alex Kim", email="alex@example.com")

    response = await client.get("/bookings")
    assert response.status_code == 200
    assert [booking["id"] for booking in response.json()] == [second["id"], first["id"]]

    response = await client.get(f"/bookings/{first['id']}")
    assert response.status_code == 200
    assert response.json()["name"] == "Jamie Rivera"


@pytest.mark.asyncio
@pytest.mark.parametrize("booking_id", ["64b7f0c2a1b2c3d4e5f60718", "not-an-id"])
async def test_get_missing_booking(client, booking_id):
    response = await client.get(f"/bookings/{booking_id}")

    assert response.status_code == 404
    assert response.json() == {"error": "Booking not found"}


@pytest.mark.asyncio
async def test_confirm_booking_updates_day(client, day_store):
    booking = await create_booking(client, hours="4 Hours/$130")

    response = await client.put(f"/bookings/{booking['id']}", json={"status": "confirmed"})

    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"
    day = await day_store.find_by_date("2025-06-01")
    assert hour_labels(day) == [label for label in DEFAULT_HOUR_CATALOGUE if label != "4 Hours/$130"]


@pytest.mark.asyncio
async def test_deny_then_confirm_returns_400(client):
    booking = await create_booking(client)
    await client.put(f"/bookings/{booking['id']}", json={"status": "denied"})

    response = await client.put(f"/bookings/{booking['id']}", json={"status": "confirmed"})

    assert response.status_code == 400
    assert response.json()["error"] == "Cannot change booking status from denied to confirmed"


@pytest.mark.asyncio
async def test_update_payment_fields(client):
    booking = await create_booking(client)

    response = await client.put(
        f"/bookings/{booking['id']}",
        json={"paymentStatus": "paid", "paymentMethod": "zelle"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["paymentStatus"] == "paid"
    assert body["paymentMethod"] == "zelle"
    assert body["status"] == "unconfirmed"


@pytest.mark.asyncio
async def test_update_rejects_invalid_enum(client):
    booking = await create_booking(client)

    response = await client.put(f"/bookings/{booking['id']}", json={"paymentMethod": "paypal"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_missing_booking(client):
    response = await client.put("/bookings/64b7f0c2a1b2c3d4e5f60718", json={"status": "confirmed"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_reschedule_booking(client, day_store):
    booking = await create_booking(client, date="2025-06-01", hours="2 Hours/$70")

    response = await client.put(
        f"/bookings/datehour/{booking['id']}",
        json={"date": "2025-06-20", "hours": "8 Hours/$270"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Booking updated successfully"
    assert body["booking"]["date"] == "2025-06-20"
    assert body["booking"]["hours"] == "8 Hours/$270"

    assert hour_map(await day_store.find_by_date("2025-06-01")) == {"2 Hours/$70": True}
    assert hour_map(await day_store.find_by_date("2025-06-20")) == {"8 Hours/$270": False}


@pytest.mark.asyncio
async def test_reschedule_missing_booking(client):
    response = await client.put(
        "/bookings/datehour/64b7f0c2a1b2c3d4e5f60718",
        json={"date": "2025-06-20", "hours": "8 Hours/$270"},
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_booking_releases_slot(client, day_store):
    booking = await create_booking(client, hours="10 Hours/$340")
    await client.put(f"/bookings/{booking['id']}", json={"status": "confirmed"})

    response = await client.delete(f"/bookings/{booking['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Booking deleted successfully"}
    assert (await client.get(f"/bookings/{booking['id']}")).status_code == 404

    day = await day_store.find_by_date("2025-06-01")
    assert hour_labels(day) == DEFAULT_HOUR_CATALOGUE


@pytest.mark.asyncio
async def test_delete_missing_booking(client):
    response = await client.delete("/bookings/64b7f0c2a1b2c3d4e5f60718")

    assert response.status_code == 404
