"""Errors raised by the availability engine and booking service.

Every error carries a short ``code`` and the HTTP status the API answers
with. Messages are safe to show to guests.
"""


class BookingError(Exception):
    code = "booking_error"
    http_status = 400

    def __init__(self, message=None):
        super().__init__(message or self.default_message())

    def default_message(self):
        return "Booking request failed"

    @property
    def message(self):
        return str(self)


class ValidationError(BookingError):
    code = "validation_error"


class InvalidDateRange(ValidationError):
    code = "invalid_date_range"

    def default_message(self):
        return "Check-out date must be after check-in date"


class PastCheckin(ValidationError):
    code = "past_checkin"

    def default_message(self):
        return "Check-in date cannot be in the past"


class MissingField(ValidationError):
    code = "missing_field"

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required field: {field}")


class InvalidEmail(ValidationError):
    code = "invalid_email"

    def default_message(self):
        return "Please enter a valid email address"


class InvalidGuestCount(ValidationError):
    code = "invalid_guest_count"

    def default_message(self):
        return "At least one guest is required"


class InvalidStatus(ValidationError):
    code = "invalid_status"

    def __init__(self, status, allowed=()):
        self.status = status
        msg = f"Invalid status: {status}"
        if allowed:
            msg += f" (allowed: {', '.join(allowed)})"
        super().__init__(msg)


class RoomNotFound(BookingError):
    code = "room_not_found"
    http_status = 404

    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"Room not found: {room_id}")


class BookingNotFound(BookingError):
    code = "booking_not_found"
    http_status = 404

    def __init__(self, booking_id):
        self.booking_id = booking_id
        super().__init__(f"Booking not found: {booking_id}")


class NightUnavailable(BookingError):
    code = "night_unavailable"
    http_status = 409

    def __init__(self, night):
        self.night = night
        super().__init__(f"Room is not available on {night.isoformat()}")


class StorageFailure(BookingError):
    code = "storage_failure"
    http_status = 503

    def default_message(self):
        return "Booking storage is temporarily unavailable"
