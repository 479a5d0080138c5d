"""HTTP API tests."""

from datetime import date, timedelta
from uuid import uuid4

from sqlalchemy import text

from nestquarter.config import settings
from nestquarter.models import Booking
from nestquarter.repositories.user_repository import UserRepository
from tests.factories import auth_headers, make_booking, make_photo

API = settings.api_prefix
INTERNAL = {"X-Internal-Token": settings.internal_api_token}
JAN_1 = date(2026, 1, 1)


def stay_payload(prop, check_in: date, nights: int, guests: int = 1) -> dict:
    return {
        "property_id": str(prop.id),
        "check_in_date": str(check_in),
        "check_out_date": str(check_in + timedelta(days=nights)),
        "guest_count": guests,
    }


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Request-ID" in response.headers


async def test_requests_without_valid_token_are_rejected(client, listing):
    missing = await client.get(f"{API}/bookings/")
    garbage = await client.get(f"{API}/bookings/", headers={"Authorization": "Bearer not-a-jwt"})

    assert missing.status_code == 401
    assert garbage.status_code == 401


async def test_booking_request_flow(client, db, listing, host, guest, other_guest):
    await make_photo(db, listing, "https://img.example/cover.jpg")

    created = await client.post(
        f"{API}/bookings/", json=stay_payload(listing, JAN_1, 14, guests=2), headers=auth_headers(guest.id)
    )
    assert created.status_code == 201, created.text
    body = created.json()
    assert body["booking_status"] == "pending"
    assert body["subtotal_cents"] == 56000
    assert body["total_cents"] == 70720
    assert body["property"]["photos"][0]["photo_url"] == "https://img.example/cover.jpg"
    assert body["guest"]["id"] == str(guest.id)
    booking_id = body["id"]

    forbidden = await client.post(f"{API}/bookings/{booking_id}/accept", headers=auth_headers(guest.id))
    assert forbidden.status_code == 403

    accepted = await client.post(f"{API}/bookings/{booking_id}/accept", headers=auth_headers(host.id))
    assert accepted.status_code == 200
    assert accepted.json()["booking_status"] == "confirmed"

    too_short = await client.post(
        f"{API}/bookings/",
        json=stay_payload(listing, date(2026, 1, 10), 10),
        headers=auth_headers(other_guest.id),
    )
    assert too_short.status_code == 400

    overlapping = await client.post(
        f"{API}/bookings/",
        json=stay_payload(listing, date(2026, 1, 10), 14),
        headers=auth_headers(other_guest.id),
    )
    assert overlapping.status_code == 400
    assert overlapping.json()["detail"] == "Property is not available for the selected dates"

    again = await client.post(f"{API}/bookings/{booking_id}/accept", headers=auth_headers(host.id))
    assert again.status_code == 400
    assert again.json()["detail"] == "Cannot accept a booking that is confirmed"


async def test_checkout_before_checkin_is_a_validation_error(client, listing, guest):
    payload = stay_payload(listing, JAN_1, 14)
    payload["check_out_date"] = str(JAN_1 - timedelta(days=1))

    response = await client.post(f"{API}/bookings/", json=payload, headers=auth_headers(guest.id))

    assert response.status_code == 422


async def test_short_stay_is_rejected(client, listing, guest):
    response = await client.post(
        f"{API}/bookings/", json=stay_payload(listing, JAN_1, 13), headers=auth_headers(guest.id)
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Minimum stay is 2 weeks"


async def test_calculate_does_not_create_a_booking(client, listing, guest):
    quote = await client.post(
        f"{API}/bookings/calculate", json=stay_payload(listing, JAN_1, 14), headers=auth_headers(guest.id)
    )

    assert quote.status_code == 200
    assert quote.json()["available"] is True
    assert quote.json()["price_breakdown"]["service_fee_cents"] == 6720

    listed = await client.get(f"{API}/bookings/", headers=auth_headers(guest.id))
    assert listed.json()["total"] == 0


async def test_failed_enrichment_keeps_the_transition(client, db, session_maker, listing, host, guest, monkeypatch):
    booking = await make_booking(db, listing, guest, JAN_1, JAN_1 + timedelta(days=14))

    async def broken_lookup(self, user_id):
        await self.db.execute(text("SELECT * FROM missing_user_table"))

    monkeypatch.setattr(UserRepository, "get", broken_lookup)

    accepted = await client.post(f"{API}/bookings/{booking.id}/accept", headers=auth_headers(host.id))

    assert accepted.status_code == 200
    assert accepted.json()["booking_status"] == "confirmed"
    assert accepted.json()["guest"] is None
    assert accepted.json()["property"]["id"] == str(listing.id)

    async with session_maker() as fresh:
        stored = await fresh.get(Booking, booking.id)
        assert stored.booking_status == "confirmed"


async def test_decline_and_cancel_accept_optional_reason(client, listing, host, guest):
    first = await client.post(
        f"{API}/bookings/", json=stay_payload(listing, JAN_1, 14), headers=auth_headers(guest.id)
    )
    declined = await client.post(f"{API}/bookings/{first.json()['id']}/decline", headers=auth_headers(host.id))
    assert declined.status_code == 200
    assert declined.json()["booking_status"] == "cancelled"
    assert declined.json()["cancelled_by"] == str(host.id)

    second = await client.post(
        f"{API}/bookings/", json=stay_payload(listing, JAN_1, 14), headers=auth_headers(guest.id)
    )
    cancelled = await client.post(
        f"{API}/bookings/{second.json()['id']}/cancel",
        json={"reason": "Found a closer place"},
        headers=auth_headers(guest.id),
    )
    assert cancelled.status_code == 200
    assert cancelled.json()["cancellation_reason"] == "Found a closer place"

    terminal = await client.post(f"{API}/bookings/{second.json()['id']}/cancel", headers=auth_headers(host.id))
    assert terminal.status_code == 400


async def test_list_get_and_invoice(client, db, listing, host, guest, other_guest):
    booking = await make_booking(db, listing, guest, JAN_1, JAN_1 + timedelta(days=14))

    as_host = await client.get(f"{API}/bookings/", params={"role": "host"}, headers=auth_headers(host.id))
    assert as_host.status_code == 200
    assert [b["id"] for b in as_host.json()["bookings"]] == [str(booking.id)]

    bad_filter = await client.get(f"{API}/bookings/", params={"role": "admin"}, headers=auth_headers(host.id))
    assert bad_filter.status_code == 422

    detail = await client.get(f"{API}/bookings/{booking.id}", headers=auth_headers(guest.id))
    assert detail.status_code == 200
    assert detail.json()["host"]["id"] == str(host.id)

    stranger = await client.get(f"{API}/bookings/{booking.id}", headers=auth_headers(other_guest.id))
    assert stranger.status_code == 403

    missing = await client.get(f"{API}/bookings/{uuid4()}", headers=auth_headers(guest.id))
    assert missing.status_code == 404

    invoice = await client.get(f"{API}/bookings/{booking.id}/invoice", headers=auth_headers(guest.id))
    assert invoice.status_code == 200
    assert invoice.json()["pricing"]["subtotal_cents"] == 56000


async def test_internal_endpoints_require_token(client, db, listing, guest):
    booking = await make_booking(db, listing, guest, JAN_1, JAN_1 + timedelta(days=14))

    no_token = await client.post(
        f"{API}/internal/bookings/{booking.id}/payment-status", json={"payment_status": "completed"}
    )
    wrong_token = await client.post(
        f"{API}/internal/bookings/complete-due", headers={"X-Internal-Token": "nope"}
    )

    assert no_token.status_code == 403
    assert wrong_token.status_code == 403


async def test_stay_to_payout(client, db, listing, host, guest):
    created = await client.post(
        f"{API}/bookings/", json=stay_payload(listing, JAN_1, 14), headers=auth_headers(guest.id)
    )
    booking_id = created.json()["id"]
    await client.post(f"{API}/bookings/{booking_id}/accept", headers=auth_headers(host.id))

    paid = await client.post(
        f"{API}/internal/bookings/{booking_id}/payment-status",
        json={"payment_status": "completed"},
        headers=INTERNAL,
    )
    assert paid.status_code == 200
    assert paid.json()["payment_status"] == "completed"

    too_early = await client.post(
        f"{API}/internal/bookings/complete-due", params={"today": "2026-01-15"}, headers=INTERNAL
    )
    assert too_early.json()["completed"] == 0

    sweep = await client.post(
        f"{API}/internal/bookings/complete-due", params={"today": "2026-01-16"}, headers=INTERNAL
    )
    assert sweep.status_code == 200
    assert sweep.json() == {"completed": 1, "booking_ids": [booking_id]}

    payout = await client.post(f"{API}/payouts/request", json={}, headers=auth_headers(host.id))
    assert payout.status_code == 201, payout.text
    assert payout.json()["net_payout_cents"] == 54400

    repeat = await client.post(f"{API}/payouts/request", json={}, headers=auth_headers(host.id))
    assert repeat.status_code == 400
    assert repeat.json()["detail"] == "No eligible bookings found for payout"

    listed = await client.get(f"{API}/payouts/", headers=auth_headers(host.id))
    assert listed.json()["total"] == 1
    payout_id = listed.json()["payouts"][0]["id"]

    detail = await client.get(f"{API}/payouts/{payout_id}", headers=auth_headers(host.id))
    assert detail.status_code == 200
    assert detail.json()["booking"]["id"] == booking_id

    not_owner = await client.get(f"{API}/payouts/{payout_id}", headers=auth_headers(guest.id))
    assert not_owner.status_code == 403


async def test_property_search_and_availability(client, db, listing, guest):
    await make_booking(db, listing, guest, JAN_1, JAN_1 + timedelta(days=14), booking_status="confirmed")

    free = await client.get(
        f"{API}/properties/search", params={"check_in": "2026-01-15", "check_out": "2026-02-12"}
    )
    assert free.status_code == 200
    assert [p["id"] for p in free.json()["properties"]] == [str(listing.id)]

    taken = await client.get(
        f"{API}/properties/search", params={"check_in": "2026-01-10", "check_out": "2026-02-12"}
    )
    assert taken.json()["total"] == 0

    half_range = await client.get(f"{API}/properties/search", params={"check_in": "2026-01-10"})
    assert half_range.status_code == 422

    availability = await client.get(
        f"{API}/properties/{listing.id}/availability",
        params={"check_in": "2026-01-15", "check_out": "2026-02-12"},
    )
    assert availability.status_code == 200
    assert availability.json()["available"] is True
    assert availability.json()["booked_dates"] == [
        {"start_date": "2026-01-01", "end_date": "2026-01-15", "status": "confirmed"}
    ]


async def test_payout_query_and_body_validation(client, host):
    filtered = await client.get(f"{API}/payouts/", params={"status": "completed"}, headers=auth_headers(host.id))
    assert filtered.status_code == 200
    assert filtered.json()["total"] == 0

    bad_status = await client.get(f"{API}/payouts/", params={"status": "paid"}, headers=auth_headers(host.id))
    assert bad_status.status_code == 422

    long_method = await client.post(
        f"{API}/payouts/request", json={"payout_method_id": "a" * 101}, headers=auth_headers(host.id)
    )
    assert long_method.status_code == 422
