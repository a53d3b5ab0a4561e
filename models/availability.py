from datetime import datetime
from models.db import db

class AvailabilityRecord(db.Model):
    __tablename__ = "availability"

    # One row per room per night; absent row means available
    room_id = db.Column(db.String(40), primary_key=True)
    date = db.Column(db.Date, primary_key=True)

    status = db.Column(db.String(20), nullable=False, default="available")
    # status values: available, booked, maintenance
    booking_id = db.Column(db.String(40), nullable=True, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            "room_id": self.room_id,
            "date": self.date.isoformat(),
            "status": self.status,
            "booking_id": self.booking_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
