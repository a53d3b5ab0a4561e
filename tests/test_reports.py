from datetime import date

from services.reports import booking_statistics, month_bounds, room_occupancy


def _booking(booking_id, status, total, created_at="2025-03-01T09:00:00+00:00"):
    return {
        "booking_id": booking_id,
        "room_id": "room-001",
        "checkin_date": "2025-03-10",
        "checkout_date": "2025-03-12",
        "booking_status": status,
        "total_amount": total,
        "created_at": created_at,
    }


def test_statistics_count_and_revenue(memory_store):
    memory_store.insert_booking(_booking("A", "confirmed", 5600))
    memory_store.insert_booking(_booking("B", "completed", 3920, created_at="2025-02-14T09:00:00+00:00"))
    memory_store.insert_booking(_booking("C", "cancelled", 6720))
    memory_store.insert_booking(_booking("D", "pending", 2240))
    memory_store.insert_booking(_booking("E", "no_show", 2240))

    stats = booking_statistics(memory_store, date(2025, 3, 20))

    assert stats["total_bookings"] == 5
    assert stats["confirmed_bookings"] == 1
    assert stats["completed_bookings"] == 1
    assert stats["cancelled_bookings"] == 1
    assert stats["pending_bookings"] == 1
    assert stats["total_revenue"] == 9520
    assert stats["monthly_revenue"] == 5600
    assert stats["average_booking_value"] == 4760


def test_statistics_without_revenue(memory_store):
    memory_store.insert_booking(_booking("C", "cancelled", 6720))
    stats = booking_statistics(memory_store, date(2025, 3, 20))
    assert stats["average_booking_value"] == 0
    assert stats["total_revenue"] == 0


def test_month_bounds():
    assert month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))


def test_occupancy_counts_missing_nights_as_available(memory_store):
    memory_store.put_night({"room_id": "room-001", "date": "2025-03-01", "status": "booked", "booking_id": "A"})
    memory_store.put_night({"room_id": "room-001", "date": "2025-03-02", "status": "booked", "booking_id": "A"})
    memory_store.put_night({"room_id": "room-001", "date": "2025-03-03", "status": "maintenance"})
    memory_store.put_night({"room_id": "room-001", "date": "2025-04-01", "status": "booked", "booking_id": "B"})

    rows = {r["room_id"]: r for r in room_occupancy(memory_store, date(2025, 3, 1), date(2025, 3, 10))}

    assert rows["room-001"] == {
        "room_id": "room-001",
        "room_name": "Mountain View Deluxe",
        "total_days": 10,
        "booked_days": 2,
        "available_days": 7,
        "maintenance_days": 1,
        "occupancy_rate": 20.0,
    }
    assert rows["room-003"]["booked_days"] == 0
    assert rows["room-003"]["available_days"] == 10


def test_occupancy_empty_window(memory_store):
    assert room_occupancy(memory_store, date(2025, 3, 10), date(2025, 3, 1)) == []
