from datetime import date, timedelta

import pytest

from app import create_app
from config import TestConfig
from models import db
from services.availability import AvailabilityEngine
from services.booking import BookingService
from stores.memory_store import MemoryStore
from utils.seed import SAMPLE_ROOMS, seed_rooms

TODAY = date(2025, 3, 1)


class FixedRandom:
    """Stands in for random.Random; hands out suffixes in order."""

    def __init__(self, *values):
        self.values = list(values)

    def randint(self, a, b):
        return self.values.pop(0) if self.values else a


@pytest.fixture
def memory_store():
    return MemoryStore(rooms=SAMPLE_ROOMS)


@pytest.fixture
def engine(memory_store):
    return AvailabilityEngine(memory_store, today=lambda: TODAY)


@pytest.fixture
def service(memory_store, engine):
    return BookingService(memory_store, engine, id_prefix="AA")


@pytest.fixture
def booking_payload():
    return {
        "room_id": "room-002",
        "checkin_date": "2025-03-10",
        "checkout_date": "2025-03-13",
        "guest_name": "Asha Rai",
        "guest_email": "asha@example.com",
        "guest_phone": "+91 98300 00000",
        "adults": 2,
        "children": 0,
    }


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        seed_rooms(app.extensions["homestay_store"])
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def stay():
    """A stay far enough ahead to be in the future in any timezone."""
    checkin = date.today() + timedelta(days=30)
    return checkin, checkin + timedelta(days=3)
