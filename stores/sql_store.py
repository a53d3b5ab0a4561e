import logging
from datetime import date, datetime, timezone
from functools import wraps

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db
from models.availability import AvailabilityRecord
from models.booking import Booking
from models.room import Room
from services.errors import StorageFailure

logger = logging.getLogger(__name__)

ROOM_FIELDS = (
    "name", "description", "price", "capacity", "room_size",
    "bed_type", "floor", "amenities", "images", "status",
)


def _storage_errors(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception("SQL store %s failed", fn.__name__)
            raise StorageFailure() from exc
    return wrapper


def _to_datetime(value):
    if value is None or isinstance(value, datetime):
        return value
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _to_date(value):
    return value if isinstance(value, date) else date.fromisoformat(value)


class SqlStore:
    """Flask-SQLAlchemy backed store. Needs an application context."""

    name = "sql"

    # ---------- Catalog ----------
    @_storage_errors
    def list_rooms(self, status=None):
        q = Room.query
        if status:
            q = q.filter_by(status=status)
        return [r.to_dict() for r in q.order_by(Room.seq.asc()).all()]

    @_storage_errors
    def get_room(self, room_id):
        room = Room.query.filter_by(room_id=room_id).first()
        return room.to_dict() if room else None

    @_storage_errors
    def put_room(self, room):
        row = Room.query.filter_by(room_id=room["room_id"]).first()
        if row is None:
            row = Room(room_id=room["room_id"])
            db.session.add(row)
        for field in ROOM_FIELDS:
            if field in room:
                setattr(row, field, room[field])
        db.session.commit()

    # ---------- Ledger ----------
    @_storage_errors
    def get_night(self, room_id, night):
        record = db.session.get(AvailabilityRecord, (room_id, night))
        return record.to_dict() if record else None

    @_storage_errors
    def put_night(self, record):
        db.session.merge(AvailabilityRecord(
            room_id=record["room_id"],
            date=_to_date(record["date"]),
            status=record.get("status", "available"),
            booking_id=record.get("booking_id"),
        ))
        db.session.commit()

    @_storage_errors
    def claim_night(self, room_id, night, booking_id):
        now = datetime.utcnow()
        result = db.session.execute(
            sa.update(AvailabilityRecord)
            .where(
                AvailabilityRecord.room_id == room_id,
                AvailabilityRecord.date == night,
                AvailabilityRecord.status == "available",
            )
            .values(status="booked", booking_id=booking_id, updated_at=now)
        )
        if result.rowcount == 1:
            db.session.commit()
            return True

        # No free row to flip; the primary key rejects the insert if any row exists
        try:
            db.session.execute(
                sa.insert(AvailabilityRecord).values(
                    room_id=room_id, date=night, status="booked",
                    booking_id=booking_id, created_at=now, updated_at=now,
                )
            )
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return False
        return True

    @_storage_errors
    def release_night(self, room_id, night, booking_id):
        result = db.session.execute(
            sa.update(AvailabilityRecord)
            .where(
                AvailabilityRecord.room_id == room_id,
                AvailabilityRecord.date == night,
                AvailabilityRecord.booking_id == booking_id,
            )
            .values(status="available", booking_id=None, updated_at=datetime.utcnow())
        )
        db.session.commit()
        return result.rowcount == 1

    @_storage_errors
    def nights_for_booking(self, booking_id):
        rows = (
            AvailabilityRecord.query
            .filter_by(booking_id=booking_id)
            .order_by(AvailabilityRecord.date.asc())
            .all()
        )
        return [r.to_dict() for r in rows]

    @_storage_errors
    def nights_between(self, start, end):
        rows = AvailabilityRecord.query.filter(
            AvailabilityRecord.date >= start,
            AvailabilityRecord.date <= end,
        ).all()
        return [r.to_dict() for r in rows]

    # ---------- Bookings ----------
    @_storage_errors
    def insert_booking(self, booking):
        row = Booking(**{
            **booking,
            "checkin_date": _to_date(booking["checkin_date"]),
            "checkout_date": _to_date(booking["checkout_date"]),
            "created_at": _to_datetime(booking.get("created_at")),
            "updated_at": _to_datetime(booking.get("updated_at")),
        })
        db.session.add(row)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return False
        return True

    @_storage_errors
    def get_booking(self, booking_id):
        row = db.session.get(Booking, booking_id)
        return row.to_dict() if row else None

    @_storage_errors
    def update_booking(self, booking_id, fields):
        row = db.session.get(Booking, booking_id)
        if row is None:
            return None
        for field, value in fields.items():
            if field in ("created_at", "updated_at"):
                value = _to_datetime(value)
            setattr(row, field, value)
        db.session.commit()
        return row.to_dict()

    @_storage_errors
    def list_bookings(self, status=None):
        q = Booking.query
        if status:
            q = q.filter_by(booking_status=status)
        return [b.to_dict() for b in q.all()]

    # ---------- Admin ----------
    @_storage_errors
    def create_schema(self):
        db.create_all()

    @_storage_errors
    def ping(self):
        db.session.execute(sa.text("SELECT 1"))
        return {"backend": self.name, "rooms": Room.query.count()}
