from datetime import datetime
from models.db import db

class Booking(db.Model):
    __tablename__ = "bookings"

    booking_id = db.Column(db.String(40), primary_key=True)

    room_id = db.Column(db.String(40), nullable=False, index=True)
    room_name = db.Column(db.String(120), nullable=True)

    guest_name = db.Column(db.String(120), nullable=False)
    guest_email = db.Column(db.String(255), nullable=False, index=True)
    guest_phone = db.Column(db.String(30), nullable=False)

    checkin_date = db.Column(db.Date, nullable=False, index=True)
    checkout_date = db.Column(db.Date, nullable=False)
    adults = db.Column(db.Integer, nullable=False, default=1)
    children = db.Column(db.Integer, nullable=False, default=0)

    nights = db.Column(db.Integer, nullable=False)
    base_amount = db.Column(db.Integer, nullable=False)
    tax_amount = db.Column(db.Integer, nullable=False)
    total_amount = db.Column(db.Integer, nullable=False)

    booking_status = db.Column(db.String(20), nullable=False, default="confirmed", index=True)
    # status values: pending, confirmed, cancelled, completed, no_show
    payment_status = db.Column(db.String(20), nullable=False, default="pending")
    # status values: pending, paid, failed, refunded

    special_requests = db.Column(db.Text, nullable=True)
    booking_source = db.Column(db.String(20), nullable=False, default="website")
    admin_notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.CheckConstraint("checkout_date > checkin_date", name="ck_booking_dates_ordered"),
    )

    def to_dict(self):
        return {
            "booking_id": self.booking_id,
            "room_id": self.room_id,
            "room_name": self.room_name,
            "guest_name": self.guest_name,
            "guest_email": self.guest_email,
            "guest_phone": self.guest_phone,
            "checkin_date": self.checkin_date.isoformat(),
            "checkout_date": self.checkout_date.isoformat(),
            "adults": self.adults,
            "children": self.children,
            "nights": self.nights,
            "base_amount": self.base_amount,
            "tax_amount": self.tax_amount,
            "total_amount": self.total_amount,
            "booking_status": self.booking_status,
            "payment_status": self.payment_status,
            "special_requests": self.special_requests or "",
            "booking_source": self.booking_source,
            "admin_notes": self.admin_notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
