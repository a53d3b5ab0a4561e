from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP

TAX_RATE = Decimal("0.12")  # GST on room tariff


def round_half_up(value) -> int:
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def count_nights(checkin: date, checkout: date) -> int:
    return (checkout - checkin).days


def iter_nights(checkin: date, checkout: date):
    """Yield every occupied night of a stay, checkout day excluded."""
    night = checkin
    while night < checkout:
        yield night
        night += timedelta(days=1)


def price_breakdown(price_per_night: int, nights: int) -> dict:
    """Quote for a stay. Search results and bookings must both come from here."""
    subtotal = int(price_per_night) * int(nights)
    tax = round_half_up(Decimal(subtotal) * TAX_RATE)
    return {"subtotal": subtotal, "tax": tax, "total": subtotal + tax}
