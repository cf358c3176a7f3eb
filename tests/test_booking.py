import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError

from app.models.booking import Booking, BookingStatus
from app.services import admission, ledger

from tests.conf_tests import (
    client,
    clear_db,
    test_db,
    test_user_data,
    auth_headers,
    make_room,
    make_booking,
    days,
    TODAY,
)


# Fixtures
@pytest.fixture
def test_room(make_room): # pylint: disable=redefined-outer-name
    return make_room("101", "AC")


def booking_payload(check_in, check_out, guest_name="John Smith", room_number="101"):
    return {
        "guest_name": guest_name,
        "room_number": room_number,
        "check_in": check_in.isoformat(),
        "check_out": check_out.isoformat(),
    }


# Tests
# pylint: disable-next=redefined-outer-name
def test_create_booking_success(auth_headers, test_room):
    response = client.post("/bookings/", json=booking_payload(days(10), days(15)), headers=auth_headers)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["id"] > 0
    assert data["guest_name"] == "John Smith"
    assert data["room_number"] == "101"
    assert data["check_in"] == days(10).isoformat()
    assert data["check_out"] == days(15).isoformat()
    assert data["status"] == "active"
    assert data["checkout_date"] is None
    assert data["created_at"]


def test_create_booking_unauthorized(test_room):
    response = client.post("/bookings/", json=booking_payload(days(10), days(15)))
    assert response.status_code in [
        status.HTTP_401_UNAUTHORIZED,
        status.HTTP_403_FORBIDDEN,
    ]


def test_create_booking_starting_today(auth_headers, test_room):
    response = client.post("/bookings/", json=booking_payload(TODAY, days(1)), headers=auth_headers)
    assert response.status_code == status.HTTP_201_CREATED


def test_create_booking_missing_field(auth_headers, test_room):
    payload = booking_payload(days(1), days(2))
    del payload["room_number"]
    response = client.post("/bookings/", json=payload, headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "required" in response.json()["detail"]


def test_create_booking_blank_guest_name(auth_headers, test_room):
    response = client.post("/bookings/", json=booking_payload(days(1), days(2), guest_name="   "), headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.parametrize(
    "check_in, check_out, detail",
    [
        (days(5), days(5), "Check-out date must be after check-in date"),
        (days(5), days(3), "Check-out date must be after check-in date"),
        (days(-1), days(3), "Check-in date cannot be in the past"),
    ],
)
def test_create_booking_bad_dates(auth_headers, test_room, check_in, check_out, detail):
    response = client.post("/bookings/", json=booking_payload(check_in, check_out), headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == detail


def test_create_booking_unknown_room(auth_headers):
    response = client.post("/bookings/", json=booking_payload(days(1), days(2), room_number="999"), headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Room does not exist"


def test_create_booking_conflict_returns_conflicts(auth_headers, test_room, make_booking):
    existing = make_booking("101", check_in=days(10), check_out=days(15), guest_name="Ada")
    response = client.post("/bookings/", json=booking_payload(days(12), days(14)), headers=auth_headers)
    assert response.status_code == status.HTTP_409_CONFLICT
    data = response.json()
    assert data["detail"] == "Room is not available for the selected dates"
    assert [b["id"] for b in data["conflicting_bookings"]] == [existing.id]
    assert data["conflicting_bookings"][0]["guest_name"] == "Ada"


def test_create_booking_touching_ranges(auth_headers, test_room, make_booking):
    make_booking("101", check_in=days(10), check_out=days(15))
    after = client.post("/bookings/", json=booking_payload(days(15), days(20)), headers=auth_headers)
    before = client.post("/bookings/", json=booking_payload(days(5), days(10)), headers=auth_headers)
    assert after.status_code == status.HTTP_201_CREATED
    assert before.status_code == status.HTTP_201_CREATED


def test_resubmitting_same_booking_conflicts(auth_headers, test_room):
    first = client.post("/bookings/", json=booking_payload(days(3), days(6)), headers=auth_headers)
    second = client.post("/bookings/", json=booking_payload(days(3), days(6)), headers=auth_headers)
    assert first.status_code == status.HTTP_201_CREATED
    assert second.status_code == status.HTTP_409_CONFLICT


def test_closed_booking_frees_dates(auth_headers, test_room, make_booking):
    make_booking("101", check_in=days(1), check_out=days(5), status=BookingStatus.CHECKED_OUT)
    response = client.post("/bookings/", json=booking_payload(days(2), days(4)), headers=auth_headers)
    assert response.status_code == status.HTTP_201_CREATED


def test_get_bookings_active_newest_first(auth_headers, test_room, make_room, make_booking):
    make_room("102", "Non-AC")
    make_booking("101", check_in=days(-5), check_out=days(-1), status=BookingStatus.CHECKED_OUT)
    first = client.post("/bookings/", json=booking_payload(days(1), days(2)), headers=auth_headers).json()
    second = client.post("/bookings/", json=booking_payload(days(1), days(2), room_number="102"), headers=auth_headers).json()

    response = client.get("/bookings/")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [b["id"] for b in data] == [second["id"], first["id"]]
    assert data[0]["room_type"] == "Non-AC"
    assert data[1]["room_type"] == "AC"


def test_get_booking_not_found():
    response = client.get("/bookings/9999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Booking not found"


def test_cancel_booking(auth_headers, test_room, make_booking, test_db):
    booking = make_booking("101")
    response = client.delete(f"/bookings/{booking.id}", headers=auth_headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert test_db.query(Booking).filter(Booking.id == booking.id).first() is None
    assert client.get("/bookings/").json() == []
    # No longer blocks removal of the room
    assert client.delete("/rooms/101", headers=auth_headers).status_code == status.HTTP_204_NO_CONTENT


def test_cancel_closed_booking(auth_headers, test_room, make_booking):
    booking = make_booking("101", check_in=days(-3), check_out=days(-1), status=BookingStatus.CHECKED_OUT)
    response = client.delete(f"/bookings/{booking.id}", headers=auth_headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT


def test_cancel_booking_not_found(auth_headers):
    response = client.delete("/bookings/9999", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_checkout_booking(auth_headers, test_room, make_booking):
    booking = make_booking("101", check_in=days(-2), check_out=days(2))
    response = client.post(f"/bookings/{booking.id}/checkout", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["checkout_date"] == TODAY.isoformat()

    stored = client.get(f"/bookings/{booking.id}").json()
    assert stored["status"] == "checked-out"
    assert stored["checkout_date"] == TODAY.isoformat()
    assert client.get("/bookings/").json() == []


def test_checkout_twice_is_not_found(auth_headers, test_room, make_booking):
    booking = make_booking("101")
    assert client.post(f"/bookings/{booking.id}/checkout", headers=auth_headers).status_code == status.HTTP_200_OK
    response = client.post(f"/bookings/{booking.id}/checkout", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Active booking not found"


def test_manual_vacate(auth_headers, test_room, make_booking):
    booking = make_booking("101", check_in=days(-1), check_out=days(3))
    response = client.post(f"/bookings/{booking.id}/manual-vacate", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["vacate_date"] == TODAY.isoformat()
    assert client.get(f"/bookings/{booking.id}").json()["status"] == "manually-vacated"

    # Vacated rooms can be booked again for the rest of the period
    again = client.post("/bookings/", json=booking_payload(TODAY, days(3)), headers=auth_headers)
    assert again.status_code == status.HTTP_201_CREATED


def test_manual_vacate_after_checkout_is_not_found(auth_headers, test_room, make_booking):
    booking = make_booking("101", status=BookingStatus.CHECKED_OUT)
    response = client.post(f"/bookings/{booking.id}/manual-vacate", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_check_availability_for_period(test_room, make_booking):
    existing = make_booking("101", check_in=days(10), check_out=days(15))
    busy = client.post(
        "/bookings/check-availability",
        json={"room_number": "101", "check_in": days(14).isoformat(), "check_out": days(16).isoformat()},
    )
    assert busy.status_code == status.HTTP_200_OK
    data = busy.json()
    assert data["available"] is False
    assert data["period"] == {"check_in": days(14).isoformat(), "check_out": days(16).isoformat()}
    assert [b["id"] for b in data["conflicting_bookings"]] == [existing.id]

    free = client.post(
        "/bookings/check-availability",
        json={"room_number": "101", "check_in": days(15).isoformat(), "check_out": days(16).isoformat()},
    )
    assert free.json()["available"] is True
    assert free.json()["conflicting_bookings"] == []


def test_check_availability_now(test_room, make_booking):
    make_booking("101", check_in=days(-1), check_out=days(1), guest_name="Ada")
    response = client.post("/bookings/check-availability", json={"room_number": "101"})
    data = response.json()
    assert data["available"] is False
    assert data["current_bookings"][0]["guest_name"] == "Ada"
    assert data["period"] is None


def test_check_availability_ignores_booking_ending_today(test_room, make_booking):
    make_booking("101", check_in=days(-3), check_out=TODAY)
    response = client.post("/bookings/check-availability", json={"room_number": "101"})
    assert response.json()["available"] is True


def test_check_availability_requires_room():
    response = client.post("/bookings/check-availability", json={})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Room number is required"


def test_check_availability_half_period(test_room):
    response = client.post(
        "/bookings/check-availability",
        json={"room_number": "101", "check_in": days(1).isoformat()},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_check_availability_bad_dates(test_room):
    response = client.post(
        "/bookings/check-availability",
        json={"room_number": "101", "check_in": days(3).isoformat(), "check_out": days(3).isoformat()},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Check-out date must be after check-in date"


def test_booking_record_survives_room_removal(auth_headers, test_room, make_booking):
    booking = make_booking("101", check_in=days(-3), check_out=days(-1), status=BookingStatus.CHECKED_OUT)
    assert client.delete("/rooms/101", headers=auth_headers).status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/bookings/{booking.id}").json()["room_number"] == "101"


def test_storage_failure_is_not_a_business_error(monkeypatch):
    def unavailable(db):
        raise OperationalError("SELECT bookings", {}, Exception("unable to open database file"))

    monkeypatch.setattr(ledger, "list_active_bookings", unavailable)
    response = client.get("/bookings/")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"detail": "Database error"}


def test_storage_failure_during_admission(auth_headers, test_room, monkeypatch):
    def unavailable(*args):
        raise OperationalError("INSERT INTO bookings", {}, Exception("database is locked"))

    monkeypatch.setattr(admission, "insert_booking", unavailable)
    response = client.post("/bookings/", json=booking_payload(days(1), days(2)), headers=auth_headers)
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"detail": "Database error"}
    assert client.get("/bookings/").json() == []
