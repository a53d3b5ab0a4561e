from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from models import db
from services.availability import AvailabilityEngine
from services.booking import BookingService
from services.errors import StorageFailure
from stores.sql_store import SqlStore
from tests.conftest import TODAY

NIGHT = date(2025, 3, 10)


@pytest.fixture
def store(app):
    return app.extensions["homestay_store"]


def test_rooms_keep_catalog_order(store):
    assert [r["room_id"] for r in store.list_rooms()] == ["room-001", "room-002", "room-003"]
    assert store.get_room("room-003")["amenities"][0] == "Mountain View"
    assert store.get_room("missing") is None


def test_put_room_updates_existing(store):
    store.put_room({"room_id": "room-001", "price": 2700})
    assert store.get_room("room-001")["price"] == 2700
    assert len(store.list_rooms()) == 3


def test_claim_absent_night(store):
    assert store.claim_night("room-001", NIGHT, "AA1") is True
    assert store.get_night("room-001", NIGHT)["booking_id"] == "AA1"


def test_claim_booked_night_fails(store):
    store.claim_night("room-001", NIGHT, "AA1")
    assert store.claim_night("room-001", NIGHT, "AA2") is False
    assert store.get_night("room-001", NIGHT)["booking_id"] == "AA1"


def test_claim_maintenance_night_fails(store):
    store.put_night({"room_id": "room-001", "date": "2025-03-10", "status": "maintenance"})
    assert store.claim_night("room-001", NIGHT, "AA1") is False


def test_claim_released_night(store):
    store.claim_night("room-001", NIGHT, "AA1")
    assert store.release_night("room-001", NIGHT, "AA1") is True
    assert store.claim_night("room-001", NIGHT, "AA2") is True


def test_release_only_own_night(store):
    store.claim_night("room-001", NIGHT, "AA1")
    assert store.release_night("room-001", NIGHT, "AA2") is False
    assert store.get_night("room-001", NIGHT)["status"] == "booked"


def test_nights_queries(store):
    store.claim_night("room-001", date(2025, 3, 11), "AA1")
    store.claim_night("room-001", NIGHT, "AA1")
    store.claim_night("room-002", date(2025, 4, 1), "AA2")

    assert [r["date"] for r in store.nights_for_booking("AA1")] == ["2025-03-10", "2025-03-11"]
    assert len(store.nights_between(date(2025, 3, 1), date(2025, 3, 31))) == 2


def test_booking_round_trip_through_service(store):
    engine = AvailabilityEngine(store, today=lambda: TODAY)
    service = BookingService(store, engine)
    result = service.create_booking({
        "room_id": "room-001",
        "checkin_date": "2025-03-10",
        "checkout_date": "2025-03-12",
        "guest_name": "Tenzing",
        "guest_email": "tenzing@example.com",
        "guest_phone": "9800000000",
        "adults": 2,
        "children": 1,
    })

    booking = store.get_booking(result["booking_id"])
    assert booking["checkin_date"] == "2025-03-10"
    assert booking["total_amount"] == 5600
    assert booking["children"] == 1
    assert not engine.is_room_available("room-001", NIGHT)

    service.update_booking_status(result["booking_id"], "cancelled", {"admin_notes": "Guest called"})
    assert engine.is_room_available("room-001", NIGHT)
    assert store.get_booking(result["booking_id"])["admin_notes"] == "Guest called"
    assert [b["booking_id"] for b in store.list_bookings(status="cancelled")] == [result["booking_id"]]


def test_duplicate_booking_id_not_inserted(store):
    booking = {
        "booking_id": "AA1", "room_id": "room-001", "room_name": "x",
        "guest_name": "a", "guest_email": "a@b.co", "guest_phone": "1",
        "checkin_date": "2025-03-10", "checkout_date": "2025-03-11",
        "adults": 1, "children": 0, "nights": 1,
        "base_amount": 2500, "tax_amount": 300, "total_amount": 2800,
        "booking_status": "confirmed", "payment_status": "pending",
        "special_requests": "", "booking_source": "website", "admin_notes": None,
        "created_at": "2025-03-01T10:00:00+00:00", "updated_at": "2025-03-01T10:00:00+00:00",
    }
    assert store.insert_booking(booking) is True
    assert store.insert_booking(dict(booking)) is False


def test_update_missing_booking(store):
    assert store.update_booking("nope", {"booking_status": "cancelled"}) is None


def test_database_errors_become_storage_failure(store, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(db.session, "execute", broken)
    with pytest.raises(StorageFailure):
        store.ping()


def test_ping(store):
    assert store.ping() == {"backend": "sql", "rooms": 3}


def test_store_is_sql_backend(store):
    assert isinstance(store, SqlStore)
