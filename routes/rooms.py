from flask import Blueprint, request, jsonify

from services import availability_engine
from services.pricing import count_nights, price_breakdown
from services.requests import SearchRequest
from stores import get_store

rooms_bp = Blueprint("rooms", __name__, url_prefix="/rooms")


def _with_pricing(room: dict, nights: int) -> dict:
    quote = price_breakdown(room["price"], nights)
    return {
        **room,
        "nights": nights,
        "subtotal": quote["subtotal"],
        "tax": quote["tax"],
        "total_amount": quote["total"],
    }


@rooms_bp.get("")
def list_rooms():
    rooms = sorted(get_store().list_rooms(status="active"), key=lambda r: (int(r["price"]), r["room_id"]))
    return jsonify(rooms=rooms, count=len(rooms)), 200


@rooms_bp.get("/search")
def search_rooms():
    search = SearchRequest.from_args(request.args)
    rooms = availability_engine().search_candidate_rooms(
        search.checkin, search.checkout, search.adults, search.children
    )
    nights = count_nights(search.checkin, search.checkout)

    return jsonify(
        rooms=[_with_pricing(r, nights) for r in rooms],
        search_criteria={
            "checkin": search.checkin.isoformat(),
            "checkout": search.checkout.isoformat(),
            "nights": nights,
            "adults": search.adults,
            "children": search.children,
            "total_guests": search.total_guests,
        },
        count=len(rooms),
    ), 200
