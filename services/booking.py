import logging
import random
from datetime import date, datetime, timezone

from services.availability import AvailabilityEngine
from services.errors import (
    BookingNotFound,
    InvalidGuestCount,
    InvalidStatus,
    RoomNotFound,
    StorageFailure,
)
from services.pricing import count_nights, price_breakdown
from services.requests import BookingRequest

logger = logging.getLogger(__name__)

BOOKING_STATUSES = ("pending", "confirmed", "cancelled", "completed", "no_show")
PAYMENT_STATUSES = ("pending", "paid", "failed", "refunded")

BOOKING_ID_ATTEMPTS = 10


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class BookingService:
    def __init__(self, store, engine: AvailabilityEngine, id_prefix="AA", rng=None):
        self.store = store
        self.engine = engine
        self.id_prefix = id_prefix
        self._rng = rng or random.Random()

    # ---------- Create ----------
    def create_booking(self, payload) -> dict:
        request = payload if isinstance(payload, BookingRequest) else BookingRequest.from_payload(payload)
        self.engine.validate_stay(request.checkin, request.checkout)
        if request.total_guests < 1:
            raise InvalidGuestCount()

        room = self.store.get_room(request.room_id)
        if not room or room.get("status") != "active":
            raise RoomNotFound(request.room_id)
        if request.total_guests > int(room["capacity"]):
            raise InvalidGuestCount(f"{room.get('name') or room['room_id']} sleeps at most {room['capacity']} guests")

        nights = count_nights(request.checkin, request.checkout)
        quote = price_breakdown(room["price"], nights)
        booking_id = self._new_booking_id()

        self.engine.reserve_nights(room["room_id"], request.checkin, request.checkout, booking_id)

        timestamp = now_iso()
        booking = {
            "booking_id": booking_id,
            "room_id": room["room_id"],
            "room_name": room.get("name"),
            "guest_name": request.guest_name,
            "guest_email": request.guest_email,
            "guest_phone": request.guest_phone,
            "checkin_date": request.checkin.isoformat(),
            "checkout_date": request.checkout.isoformat(),
            "adults": request.adults,
            "children": request.children,
            "nights": nights,
            "base_amount": quote["subtotal"],
            "tax_amount": quote["tax"],
            "total_amount": quote["total"],
            "booking_status": "confirmed",
            "payment_status": "pending",
            "special_requests": request.special_requests,
            "booking_source": "website",
            "admin_notes": None,
            "created_at": timestamp,
            "updated_at": timestamp,
        }

        try:
            inserted = self.store.insert_booking(booking)
        except StorageFailure:
            self.engine.release_nights(booking_id)
            raise
        if not inserted:
            self.engine.release_nights(booking_id)
            raise StorageFailure("Could not save the booking, please try again")

        logger.info("Booking %s confirmed for %s, %d night(s), total %d",
                    booking_id, room["room_id"], nights, quote["total"])
        return {
            "booking_id": booking_id,
            "total_amount": quote["total"],
            "nights": nights,
            "status": "confirmed",
        }

    def _new_booking_id(self) -> str:
        # e.g. AA202503011234
        stamp = self.engine.today().strftime("%Y%m%d")
        for _ in range(BOOKING_ID_ATTEMPTS):
            candidate = f"{self.id_prefix}{stamp}{self._rng.randint(1000, 9999)}"
            if self.store.get_booking(candidate) is None:
                return candidate
        raise StorageFailure("Could not allocate a booking reference, please try again")

    # ---------- Read ----------
    def get_booking(self, booking_id: str) -> dict:
        booking = self.store.get_booking(booking_id)
        if booking is None:
            raise BookingNotFound(booking_id)
        return booking

    def list_bookings(self, status=None, start_date=None, end_date=None, limit=50):
        if status and status not in BOOKING_STATUSES:
            raise InvalidStatus(status, BOOKING_STATUSES)

        rows = []
        for booking in self.store.list_bookings(status=status or None):
            checkin = booking["checkin_date"]
            if start_date and checkin < start_date.isoformat():
                continue
            if end_date and checkin > end_date.isoformat():
                continue
            rows.append(booking)

        rows.sort(key=lambda b: b.get("created_at") or "", reverse=True)
        return rows[:limit]

    # ---------- Status ----------
    def update_booking_status(self, booking_id: str, new_status: str, extra_fields=None) -> dict:
        extra_fields = extra_fields or {}
        if new_status not in BOOKING_STATUSES:
            raise InvalidStatus(new_status, BOOKING_STATUSES)
        payment_status = extra_fields.get("payment_status")
        if payment_status is not None and payment_status not in PAYMENT_STATUSES:
            raise InvalidStatus(payment_status, PAYMENT_STATUSES)

        current = self.get_booking(booking_id)
        reactivating = current["booking_status"] == "cancelled" and new_status != "cancelled"
        if reactivating:
            # nights were released on cancellation and may have been sold since
            self._reclaim_nights(current)

        fields = {"booking_status": new_status, "updated_at": now_iso()}
        if payment_status is not None:
            fields["payment_status"] = payment_status
        if extra_fields.get("admin_notes") is not None:
            fields["admin_notes"] = extra_fields["admin_notes"]

        try:
            updated = self.store.update_booking(booking_id, fields)
        except StorageFailure:
            if reactivating:
                self.engine.release_nights(booking_id)
            raise
        if updated is None:
            if reactivating:
                self.engine.release_nights(booking_id)
            raise BookingNotFound(booking_id)
        logger.info("Booking %s moved to %s", booking_id, new_status)

        if new_status == "cancelled":
            try:
                self.engine.release_nights(booking_id)
            except StorageFailure:
                # status change stands; the nights stay booked until released by hand
                logger.error("Could not release nights for cancelled booking %s", booking_id, exc_info=True)

        return updated

    def _reclaim_nights(self, booking: dict):
        booking_id = booking["booking_id"]
        # clear anything a failed release left behind so it does not block the claim
        self.engine.release_nights(booking_id)
        self.engine.reserve_nights(
            booking["room_id"],
            date.fromisoformat(booking["checkin_date"]),
            date.fromisoformat(booking["checkout_date"]),
            booking_id,
        )
