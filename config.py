import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # SQLite database file stored next to the app as homestay.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "homestay.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Where rooms, availability and bookings live: sql | dynamodb | memory
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "sql").lower()

    # DynamoDB
    AWS_REGION = os.getenv("AWS_REGION", "ap-south-1")
    DYNAMODB_ENDPOINT_URL = os.getenv("DYNAMODB_ENDPOINT_URL")  # e.g. http://localhost:8000 for dynamodb-local
    ROOMS_TABLE = os.getenv("ROOMS_TABLE", "AlpineAura-Rooms")
    BOOKINGS_TABLE = os.getenv("BOOKINGS_TABLE", "AlpineAura-Bookings")
    AVAILABILITY_TABLE = os.getenv("AVAILABILITY_TABLE", "AlpineAura-Availability")

    # Business settings
    TIMEZONE = os.getenv("TIMEZONE", "Asia/Kolkata")
    CURRENCY = "INR"
    BOOKING_ID_PREFIX = "AA"
    CHECKIN_TIME = "14:00"
    CHECKOUT_TIME = "11:00"
    BOOKING_LIST_LIMIT = 50

    # Startup behaviour
    AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true"
    SEED_SAMPLE_ROOMS = os.getenv("SEED_SAMPLE_ROOMS", "false").lower() == "true"

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Basic app settings
    DEBUG = False


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    STORAGE_BACKEND = "sql"
    AUTO_CREATE_TABLES = True
    SEED_SAMPLE_ROOMS = False
    LOG_LEVEL = "DEBUG"
