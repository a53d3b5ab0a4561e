"""Storage backends for the room catalog, availability ledger and bookings.

Every backend offers the same methods and returns plain dicts (ISO date
strings, integer money):

    list_rooms(status=None)            get_room(room_id)         put_room(room)
    get_night(room_id, night)          put_night(record)
    claim_night(room_id, night, booking_id) -> bool
    release_night(room_id, night, booking_id) -> bool
    nights_for_booking(booking_id)     nights_between(start, end)
    insert_booking(booking) -> bool    get_booking(booking_id)
    update_booking(booking_id, fields) list_bookings(status=None)
    create_schema()                    ping()

``claim_night`` and ``release_night`` are conditional writes: a claim only
succeeds on an absent or ``available`` night, a release only touches a night
held by the given booking. I/O errors surface as ``StorageFailure``.
"""
from flask import current_app

EXTENSION_KEY = "homestay_store"


def build_store(config):
    backend = config.get("STORAGE_BACKEND", "sql")
    if backend == "sql":
        from .sql_store import SqlStore
        return SqlStore()
    if backend == "dynamodb":
        from .dynamo_store import DynamoStore
        return DynamoStore(
            rooms_table=config["ROOMS_TABLE"],
            availability_table=config["AVAILABILITY_TABLE"],
            bookings_table=config["BOOKINGS_TABLE"],
            region_name=config["AWS_REGION"],
            endpoint_url=config.get("DYNAMODB_ENDPOINT_URL"),
        )
    if backend == "memory":
        from utils.seed import SAMPLE_ROOMS
        from .memory_store import MemoryStore
        return MemoryStore(rooms=SAMPLE_ROOMS)
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend}")


def init_store(app, store=None):
    app.extensions[EXTENSION_KEY] = store or build_store(app.config)
    return app.extensions[EXTENSION_KEY]


def get_store():
    return current_app.extensions[EXTENSION_KEY]
