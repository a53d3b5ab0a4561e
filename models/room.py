from datetime import datetime
from models.db import db

class Room(db.Model):
    __tablename__ = "rooms"

    # Catalog order is insertion order; seq keeps it stable across backends
    seq = db.Column(db.Integer, primary_key=True, autoincrement=True)
    room_id = db.Column(db.String(40), unique=True, nullable=False, index=True)

    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text, nullable=True)
    price = db.Column(db.Integer, nullable=False)  # per night, whole currency units
    capacity = db.Column(db.Integer, nullable=False)
    room_size = db.Column(db.String(40), nullable=True)
    bed_type = db.Column(db.String(60), nullable=True)
    floor = db.Column(db.String(40), nullable=True)
    amenities = db.Column(db.JSON, nullable=False, default=list)
    images = db.Column(db.JSON, nullable=False, default=list)

    status = db.Column(db.String(20), nullable=False, default="active", index=True)
    # status values: active, inactive

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.CheckConstraint("price > 0", name="ck_room_price_positive"),
        db.CheckConstraint("capacity > 0", name="ck_room_capacity_positive"),
    )

    def to_dict(self):
        return {
            "room_id": self.room_id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "capacity": self.capacity,
            "room_size": self.room_size,
            "bed_type": self.bed_type,
            "floor": self.floor,
            "amenities": list(self.amenities or []),
            "images": list(self.images or []),
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
