from flask import Blueprint, request, jsonify

from services import booking_service
from services.errors import MissingField, ValidationError
from utils.audit import log_event

booking_bp = Blueprint("booking", __name__, url_prefix="/bookings")


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


# ---------- GUESTS: book a room (DOUBLE-BOOKING SAFE) ----------
@booking_bp.post("")
def create_booking():
    data = _json_body()
    confirmation = booking_service().create_booking(data)

    log_event("BOOKING_CREATE", entity="booking", entity_id=confirmation["booking_id"],
              metadata={"room_id": data.get("room_id"), "nights": confirmation["nights"]})
    return jsonify(message="Booking created successfully", **confirmation), 201


@booking_bp.get("/<booking_id>")
def get_booking(booking_id: str):
    booking = booking_service().get_booking(booking_id)
    return jsonify(booking=booking), 200


# ---------- Status changes (confirm, complete, no-show, cancel) ----------
@booking_bp.post("/<booking_id>/status")
def update_booking(booking_id: str):
    data = _json_body()
    status = (data.get("status") or "").strip()
    if not status:
        raise MissingField("status")

    extra = {k: data[k] for k in ("payment_status", "admin_notes") if data.get(k) is not None}
    booking = booking_service().update_booking_status(booking_id, status, extra)

    log_event("BOOKING_STATUS_UPDATE", entity="booking", entity_id=booking_id,
              metadata={"status": status, **extra})
    return jsonify(message="Booking updated", booking=booking), 200


@booking_bp.post("/<booking_id>/cancel")
def cancel_booking(booking_id: str):
    data = _json_body()
    reason = (data.get("reason") or "").strip() or None

    extra = {"admin_notes": reason} if reason else {}
    booking_service().update_booking_status(booking_id, "cancelled", extra)

    log_event("BOOKING_CANCEL", entity="booking", entity_id=booking_id, metadata={"reason": reason})
    return jsonify(message="Cancelled"), 200
