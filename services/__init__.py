from datetime import datetime
from zoneinfo import ZoneInfo

from flask import current_app

from stores import get_store
from .availability import AvailabilityEngine
from .booking import BookingService


def local_today():
    """Today's date at the homestay, not on the server."""
    return datetime.now(ZoneInfo(current_app.config["TIMEZONE"])).date()


def availability_engine() -> AvailabilityEngine:
    return AvailabilityEngine(get_store(), today=local_today)


def booking_service() -> BookingService:
    return BookingService(
        get_store(),
        availability_engine(),
        id_prefix=current_app.config.get("BOOKING_ID_PREFIX", "AA"),
    )
