from datetime import date

import pytest

from services.availability import AvailabilityEngine
from services.errors import InvalidDateRange, InvalidGuestCount, NightUnavailable, PastCheckin
from stores.memory_store import MemoryStore
from tests.conftest import TODAY


def _ids(rooms):
    return [r["room_id"] for r in rooms]


def test_search_orders_by_price(engine):
    rooms = engine.search_candidate_rooms(date(2025, 3, 10), date(2025, 3, 12), 1, 0)
    assert _ids(rooms) == ["room-002", "room-001", "room-003"]


def test_search_excludes_rooms_below_capacity(engine):
    rooms = engine.search_candidate_rooms(date(2025, 3, 10), date(2025, 3, 12), 2, 1)
    assert all(r["capacity"] >= 3 for r in rooms)
    assert "room-002" not in _ids(rooms)


def test_search_ties_broken_by_room_id():
    store = MemoryStore(rooms=[
        {"room_id": "b", "name": "B", "price": 1000, "capacity": 2, "status": "active"},
        {"room_id": "a", "name": "A", "price": 1000, "capacity": 2, "status": "active"},
    ])
    engine = AvailabilityEngine(store, today=lambda: TODAY)
    assert _ids(engine.search_candidate_rooms(date(2025, 3, 2), date(2025, 3, 3), 1, 0)) == ["a", "b"]


def test_search_skips_inactive_rooms(memory_store, engine):
    room = memory_store.get_room("room-002")
    room["status"] = "inactive"
    memory_store.put_room(room)
    rooms = engine.search_candidate_rooms(date(2025, 3, 10), date(2025, 3, 12), 1, 0)
    assert "room-002" not in _ids(rooms)


def test_same_day_checkout_is_invalid(engine):
    with pytest.raises(InvalidDateRange):
        engine.search_candidate_rooms(date(2025, 3, 1), date(2025, 3, 1), 1, 0)


def test_checkin_in_past(engine):
    with pytest.raises(PastCheckin):
        engine.search_candidate_rooms(date(2025, 2, 28), date(2025, 3, 2), 1, 0)


def test_checkin_today_is_allowed(engine):
    assert engine.search_candidate_rooms(TODAY, date(2025, 3, 2), 1, 0)


def test_no_guests(engine):
    with pytest.raises(InvalidGuestCount):
        engine.search_candidate_rooms(date(2025, 3, 10), date(2025, 3, 12), 0, 0)


def test_missing_record_means_available(engine):
    assert engine.is_room_available("room-001", date(2025, 3, 10))


@pytest.mark.parametrize("status, expected", [("available", True), ("booked", False), ("maintenance", False)])
def test_record_status_decides_availability(memory_store, engine, status, expected):
    memory_store.put_night({"room_id": "room-001", "date": "2025-03-10", "status": status})
    assert engine.is_room_available("room-001", date(2025, 3, 10)) is expected


def test_one_blocked_night_hides_room(memory_store, engine):
    memory_store.put_night({"room_id": "room-001", "date": "2025-03-11", "status": "maintenance"})
    rooms = engine.search_candidate_rooms(date(2025, 3, 10), date(2025, 3, 13), 1, 0)
    assert "room-001" not in _ids(rooms)


def test_checkout_night_is_not_occupied(memory_store, engine):
    memory_store.put_night({"room_id": "room-001", "date": "2025-03-13", "status": "booked"})
    rooms = engine.search_candidate_rooms(date(2025, 3, 10), date(2025, 3, 13), 1, 0)
    assert "room-001" in _ids(rooms)


def test_reserve_marks_every_night(memory_store, engine):
    engine.reserve_nights("room-001", date(2025, 3, 10), date(2025, 3, 13), "AA1")
    for day in (10, 11, 12):
        record = memory_store.get_night("room-001", date(2025, 3, day))
        assert record["status"] == "booked"
        assert record["booking_id"] == "AA1"
    assert memory_store.get_night("room-001", date(2025, 3, 13)) is None


def test_reserve_is_all_or_nothing(memory_store, engine):
    memory_store.put_night({"room_id": "room-001", "date": "2025-03-12", "status": "booked", "booking_id": "OTHER"})
    with pytest.raises(NightUnavailable) as exc:
        engine.reserve_nights("room-001", date(2025, 3, 10), date(2025, 3, 14), "AA1")
    assert exc.value.night == date(2025, 3, 12)
    assert memory_store.nights_for_booking("AA1") == []
    assert engine.is_room_available("room-001", date(2025, 3, 10))
    assert engine.is_room_available("room-001", date(2025, 3, 11))
    assert memory_store.get_night("room-001", date(2025, 3, 12))["booking_id"] == "OTHER"


def test_reserve_names_first_conflicting_night(memory_store, engine):
    memory_store.put_night({"room_id": "room-001", "date": "2025-03-13", "status": "booked"})
    memory_store.put_night({"room_id": "room-001", "date": "2025-03-11", "status": "maintenance"})
    with pytest.raises(NightUnavailable) as exc:
        engine.reserve_nights("room-001", date(2025, 3, 10), date(2025, 3, 14), "AA1")
    assert exc.value.night == date(2025, 3, 11)


class RacingStore(MemoryStore):
    """Lets a rival booking grab ``night`` after the availability check passes."""

    def __init__(self, night, **kwargs):
        super().__init__(**kwargs)
        self.race_night = night

    def claim_night(self, room_id, night, booking_id):
        if night == self.race_night and booking_id != "RIVAL":
            super().claim_night(room_id, night, "RIVAL")
        return super().claim_night(room_id, night, booking_id)


def test_conditional_write_loss_rolls_back_claimed_nights():
    store = RacingStore(date(2025, 3, 12), rooms=[
        {"room_id": "room-001", "name": "Deluxe", "price": 2500, "capacity": 3, "status": "active"},
    ])
    engine = AvailabilityEngine(store, today=lambda: TODAY)

    with pytest.raises(NightUnavailable) as exc:
        engine.reserve_nights("room-001", date(2025, 3, 10), date(2025, 3, 14), "AA1")

    assert exc.value.night == date(2025, 3, 12)
    assert store.nights_for_booking("AA1") == []
    assert [r["date"] for r in store.nights_for_booking("RIVAL")] == ["2025-03-12"]


def test_release_frees_nights(memory_store, engine):
    engine.reserve_nights("room-001", date(2025, 3, 10), date(2025, 3, 12), "AA1")
    assert engine.release_nights("AA1") == 2
    assert engine.is_room_available("room-001", date(2025, 3, 10))
    assert engine.is_room_available("room-001", date(2025, 3, 11))
    assert memory_store.get_night("room-001", date(2025, 3, 10))["booking_id"] is None


def test_release_twice_is_noop(engine):
    engine.reserve_nights("room-001", date(2025, 3, 10), date(2025, 3, 12), "AA1")
    engine.release_nights("AA1")
    assert engine.release_nights("AA1") == 0


def test_release_unknown_booking(engine):
    assert engine.release_nights("NOPE") == 0
