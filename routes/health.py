from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from services.errors import StorageFailure
from stores import get_store

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health():
    return jsonify(status="ok"), 200


@health_bp.get("/health/store")
def store_health():
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        info = get_store().ping()
    except StorageFailure as exc:
        return jsonify(success=False, message=str(exc),
                       backend=current_app.config["STORAGE_BACKEND"], timestamp=timestamp), 503
    return jsonify(success=True, timestamp=timestamp, **info), 200


@health_bp.get("/")
def docs():
    cfg = current_app.config
    return jsonify(
        api_name="Alpine Aura Homestay Booking API",
        version="1.0.0",
        storage_backend=cfg["STORAGE_BACKEND"],
        currency=cfg["CURRENCY"],
        checkin_time=cfg["CHECKIN_TIME"],
        checkout_time=cfg["CHECKOUT_TIME"],
        endpoints={
            "health": {"method": "GET", "url": "/health/store"},
            "rooms": {"method": "GET", "url": "/rooms"},
            "search": {
                "method": "GET",
                "url": "/rooms/search?checkin=YYYY-MM-DD&checkout=YYYY-MM-DD&adults=2&children=0",
            },
            "create_booking": {
                "method": "POST",
                "url": "/bookings",
                "body": ["room_id", "checkin_date", "checkout_date", "guest_name", "guest_email",
                         "guest_phone", "adults", "children (optional)", "special_requests (optional)"],
            },
            "get_booking": {"method": "GET", "url": "/bookings/<booking_id>"},
            "update_booking": {"method": "POST", "url": "/bookings/<booking_id>/status",
                               "body": ["status", "payment_status (optional)", "admin_notes (optional)"]},
            "cancel_booking": {"method": "POST", "url": "/bookings/<booking_id>/cancel"},
            "admin_bookings": {"method": "GET", "url": "/admin/bookings?status=&start_date=&end_date=&limit="},
            "admin_stats": {"method": "GET", "url": "/admin/stats"},
            "admin_occupancy": {"method": "GET", "url": "/admin/occupancy?start_date=&end_date="},
        },
    ), 200
