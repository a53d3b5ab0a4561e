"""Dashboard figures for the admin pages."""
import calendar
from datetime import date
from decimal import Decimal

from services.availability import BOOKED, MAINTENANCE
from services.pricing import round_half_up

REVENUE_STATUSES = ("confirmed", "completed")


def booking_statistics(store, today: date) -> dict:
    stats = {
        "total_bookings": 0,
        "confirmed_bookings": 0,
        "pending_bookings": 0,
        "cancelled_bookings": 0,
        "completed_bookings": 0,
        "total_revenue": 0,
        "monthly_revenue": 0,
        "average_booking_value": 0,
    }
    current_month = today.strftime("%Y-%m")
    revenue_bookings = 0

    for booking in store.list_bookings():
        stats["total_bookings"] += 1
        key = f"{booking['booking_status']}_bookings"
        if key in stats:
            stats[key] += 1

        if booking["booking_status"] in REVENUE_STATUSES:
            revenue_bookings += 1
            stats["total_revenue"] += int(booking["total_amount"])
            if (booking.get("created_at") or "")[:7] == current_month:
                stats["monthly_revenue"] += int(booking["total_amount"])

    if revenue_bookings:
        stats["average_booking_value"] = round_half_up(Decimal(stats["total_revenue"]) / revenue_bookings)
    return stats


def month_bounds(today: date):
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def room_occupancy(store, start_date: date, end_date: date) -> list:
    """Per-room night counts over the inclusive window [start_date, end_date].

    Nights without a ledger record count as available.
    """
    total_days = (end_date - start_date).days + 1
    if total_days <= 0:
        return []

    by_room = {}
    for record in store.nights_between(start_date, end_date):
        by_room.setdefault(record["room_id"], []).append(record["status"])

    rows = []
    for room in store.list_rooms(status="active"):
        statuses = by_room.get(room["room_id"], [])
        booked = statuses.count(BOOKED)
        maintenance = statuses.count(MAINTENANCE)
        rows.append({
            "room_id": room["room_id"],
            "room_name": room.get("name"),
            "total_days": total_days,
            "booked_days": booked,
            "available_days": total_days - booked - maintenance,
            "maintenance_days": maintenance,
            "occupancy_rate": round(booked / total_days * 100, 2),
        })
    return rows
