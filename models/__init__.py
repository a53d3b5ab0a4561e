from .db import db
from .audit_log import AuditLog
from .room import Room
from .availability import AvailabilityRecord
from .booking import Booking
