import re
from dataclasses import dataclass
from datetime import date

from services.errors import InvalidDateRange, InvalidEmail, InvalidGuestCount, MissingField, ValidationError

# Same pattern the booking form uses client side
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

BOOKING_REQUIRED_FIELDS = (
    "room_id",
    "checkin_date",
    "checkout_date",
    "guest_name",
    "guest_email",
    "guest_phone",
    "adults",
)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_date(value, field_name: str) -> date:
    if isinstance(value, date):
        return value
    text = str(value).strip()
    # fromisoformat also takes compact and week dates
    if not DATE_RE.match(text):
        raise InvalidDateRange(f"Invalid {field_name}. Use YYYY-MM-DD")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise InvalidDateRange(f"Invalid {field_name}. Use YYYY-MM-DD")


def parse_count(value, field_name: str, default: int = 0) -> int:
    if _is_blank(value):
        return default
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise InvalidGuestCount(f"{field_name} must be a whole number")
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise InvalidGuestCount(f"{field_name} must be a whole number")
    if n < 0:
        raise InvalidGuestCount(f"{field_name} cannot be negative")
    return n


@dataclass
class SearchRequest:
    checkin: date
    checkout: date
    adults: int = 2
    children: int = 0

    @property
    def total_guests(self) -> int:
        return self.adults + self.children

    @classmethod
    def from_args(cls, args):
        for name in ("checkin", "checkout"):
            if _is_blank(args.get(name)):
                raise MissingField(name)
        return cls(
            checkin=parse_date(args.get("checkin"), "checkin"),
            checkout=parse_date(args.get("checkout"), "checkout"),
            adults=parse_count(args.get("adults"), "adults", default=2),
            children=parse_count(args.get("children"), "children"),
        )


@dataclass
class BookingRequest:
    room_id: str
    checkin: date
    checkout: date
    guest_name: str
    guest_email: str
    guest_phone: str
    adults: int
    children: int = 0
    special_requests: str = ""

    @property
    def total_guests(self) -> int:
        return self.adults + self.children

    @classmethod
    def from_payload(cls, data):
        """Validate a raw JSON body in the order the booking form reports errors:
        required fields, then email, then dates, then guest counts."""
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        for name in BOOKING_REQUIRED_FIELDS:
            if _is_blank(data.get(name)):
                raise MissingField(name)

        email = str(data["guest_email"]).strip()
        if not EMAIL_RE.match(email):
            raise InvalidEmail()

        return cls(
            room_id=str(data["room_id"]).strip(),
            checkin=parse_date(data["checkin_date"], "checkin_date"),
            checkout=parse_date(data["checkout_date"], "checkout_date"),
            guest_name=str(data["guest_name"]).strip(),
            guest_email=email,
            guest_phone=str(data["guest_phone"]).strip(),
            adults=parse_count(data["adults"], "adults"),
            children=parse_count(data.get("children"), "children"),
            special_requests=(data.get("special_requests") or "").strip(),
        )
