"""Availability engine: which rooms can take a stay, and per-night reservations.

The ledger only stores exceptions to the default state. A night with no
record is available; a record with any status other than ``available``
blocks it.
"""
import logging
from datetime import date

from services.errors import InvalidDateRange, InvalidGuestCount, NightUnavailable, PastCheckin
from services.pricing import iter_nights

logger = logging.getLogger(__name__)

AVAILABLE = "available"
BOOKED = "booked"
MAINTENANCE = "maintenance"


class AvailabilityEngine:
    def __init__(self, store, today=None):
        self.store = store
        self._today = today or date.today

    def today(self) -> date:
        return self._today()

    def validate_stay(self, checkin: date, checkout: date):
        if checkout <= checkin:
            raise InvalidDateRange()
        if checkin < self.today():
            raise PastCheckin()

    def search_candidate_rooms(self, checkin: date, checkout: date, adults: int, children: int):
        self.validate_stay(checkin, checkout)
        if adults < 0 or children < 0 or adults + children < 1:
            raise InvalidGuestCount()

        guests = adults + children
        candidates = [
            room for room in self.store.list_rooms(status="active")
            if int(room["capacity"]) >= guests
        ]
        # sorted() is stable, so catalog order survives for equal price and id
        candidates = sorted(candidates, key=lambda r: (int(r["price"]), r["room_id"]))

        return [
            room for room in candidates
            if self.is_stay_available(room["room_id"], checkin, checkout)
        ]

    def is_room_available(self, room_id: str, night: date) -> bool:
        record = self.store.get_night(room_id, night)
        return record is None or record.get("status") == AVAILABLE

    def is_stay_available(self, room_id: str, checkin: date, checkout: date) -> bool:
        return all(self.is_room_available(room_id, night) for night in iter_nights(checkin, checkout))

    def reserve_nights(self, room_id: str, checkin: date, checkout: date, booking_id: str):
        """Claim every night of the stay for ``booking_id``, all or nothing.

        Nights are claimed in ascending order. The first conflict releases the
        nights already claimed by this call and raises ``NightUnavailable``
        for that night.
        """
        claimed = []
        try:
            for night in iter_nights(checkin, checkout):
                if not self.is_room_available(room_id, night):
                    raise NightUnavailable(night)
                # another booking can still win between the check and the write
                if not self.store.claim_night(room_id, night, booking_id):
                    raise NightUnavailable(night)
                claimed.append(night)
        except Exception:
            self._rollback(room_id, claimed, booking_id)
            raise

        logger.info("Reserved %d night(s) of %s for booking %s", len(claimed), room_id, booking_id)
        return claimed

    def _rollback(self, room_id, nights, booking_id):
        for night in nights:
            try:
                self.store.release_night(room_id, night, booking_id)
            except Exception:
                logger.exception("Rollback of %s %s for booking %s failed", room_id, night, booking_id)
        if nights:
            logger.info("Rolled back %d night(s) of %s for booking %s", len(nights), room_id, booking_id)

    def release_nights(self, booking_id: str) -> int:
        released = 0
        for record in self.store.nights_for_booking(booking_id):
            night = date.fromisoformat(record["date"])
            if self.store.release_night(record["room_id"], night, booking_id):
                released += 1
        if released:
            logger.info("Released %d night(s) held by booking %s", released, booking_id)
        return released
