import copy
import threading
from datetime import datetime, timezone


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class MemoryStore:
    """Process-local store for demos and tests. Data is lost on restart."""

    name = "memory"

    def __init__(self, rooms=None):
        self._lock = threading.Lock()
        self._rooms = {}    # room_id -> room, insertion ordered
        self._nights = {}   # (room_id, "YYYY-MM-DD") -> record
        self._bookings = {}
        for room in rooms or []:
            self.put_room(room)

    # ---------- Catalog ----------
    def list_rooms(self, status=None):
        with self._lock:
            return [
                copy.deepcopy(r) for r in self._rooms.values()
                if status is None or r.get("status") == status
            ]

    def get_room(self, room_id):
        with self._lock:
            room = self._rooms.get(room_id)
            return copy.deepcopy(room) if room else None

    def put_room(self, room):
        with self._lock:
            self._rooms[room["room_id"]] = copy.deepcopy(room)

    # ---------- Ledger ----------
    def get_night(self, room_id, night):
        with self._lock:
            record = self._nights.get((room_id, night.isoformat()))
            return dict(record) if record else None

    def put_night(self, record):
        with self._lock:
            self._nights[(record["room_id"], record["date"])] = dict(record)

    def claim_night(self, room_id, night, booking_id):
        key = (room_id, night.isoformat())
        with self._lock:
            current = self._nights.get(key)
            if current is not None and current.get("status") != "available":
                return False
            timestamp = now_iso()
            self._nights[key] = {
                "room_id": room_id,
                "date": key[1],
                "status": "booked",
                "booking_id": booking_id,
                "created_at": current["created_at"] if current else timestamp,
                "updated_at": timestamp,
            }
            return True

    def release_night(self, room_id, night, booking_id):
        key = (room_id, night.isoformat())
        with self._lock:
            current = self._nights.get(key)
            if current is None or current.get("booking_id") != booking_id:
                return False
            current["status"] = "available"
            current["booking_id"] = None
            current["updated_at"] = now_iso()
            return True

    def nights_for_booking(self, booking_id):
        with self._lock:
            return [dict(r) for r in self._nights.values() if r.get("booking_id") == booking_id]

    def nights_between(self, start, end):
        lo, hi = start.isoformat(), end.isoformat()
        with self._lock:
            return [dict(r) for r in self._nights.values() if lo <= r["date"] <= hi]

    # ---------- Bookings ----------
    def insert_booking(self, booking):
        with self._lock:
            if booking["booking_id"] in self._bookings:
                return False
            self._bookings[booking["booking_id"]] = dict(booking)
            return True

    def get_booking(self, booking_id):
        with self._lock:
            booking = self._bookings.get(booking_id)
            return dict(booking) if booking else None

    def update_booking(self, booking_id, fields):
        with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None:
                return None
            booking.update(fields)
            return dict(booking)

    def list_bookings(self, status=None):
        with self._lock:
            return [
                dict(b) for b in self._bookings.values()
                if status is None or b.get("booking_status") == status
            ]

    # ---------- Admin ----------
    def create_schema(self):
        return None

    def ping(self):
        return {"backend": self.name, "rooms": len(self._rooms)}
