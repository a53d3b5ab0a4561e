from flask import Blueprint, current_app, jsonify, request

from services import booking_service, local_today
from services.reports import booking_statistics, month_bounds, room_occupancy
from services.requests import parse_date
from stores import get_store

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")


def _date_arg(name):
    value = request.args.get(name)
    return parse_date(value, name) if value else None


@admin_bp.get("/bookings")
def list_bookings():
    limit = request.args.get("limit", type=int) or current_app.config.get("BOOKING_LIST_LIMIT", 50)
    rows = booking_service().list_bookings(
        status=(request.args.get("status") or "").strip() or None,
        start_date=_date_arg("start_date"),
        end_date=_date_arg("end_date"),
        limit=max(1, min(limit, 500)),
    )
    return jsonify(bookings=rows, count=len(rows)), 200


@admin_bp.get("/stats")
def stats():
    return jsonify(booking_statistics(get_store(), local_today())), 200


@admin_bp.get("/occupancy")
def occupancy():
    first, last = month_bounds(local_today())
    start = _date_arg("start_date") or first
    end = _date_arg("end_date") or last
    rows = room_occupancy(get_store(), start, end)
    return jsonify(
        start_date=start.isoformat(),
        end_date=end.isoformat(),
        rooms=rows,
    ), 200
