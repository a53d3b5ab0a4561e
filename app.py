import logging

from flask import Flask, jsonify
from config import Config
from routes import health_bp, rooms_bp, booking_bp, admin_bp

from models import db
from flask_migrate import Migrate
from services.errors import BookingError
from stores import init_store
from utils.seed import seed_rooms


def create_app(config_object=Config, store=None):
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(rooms_bp)
    app.register_blueprint(booking_bp)
    app.register_blueprint(admin_bp)

    # Database init (audit log always, catalog/ledger/bookings when STORAGE_BACKEND=sql)
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    store = init_store(app, store)

    with app.app_context():
        if app.config.get("AUTO_CREATE_TABLES"):
            db.create_all()
        # Seed sample rooms at startup (safe & idempotent)
        if app.config.get("SEED_SAMPLE_ROOMS"):
            seed_rooms(store)

    @app.errorhandler(BookingError)
    def _booking_error(exc):
        if exc.http_status >= 500:
            app.logger.error("%s: %s", exc.code, exc)
        return jsonify(error=exc.message, code=exc.code), exc.http_status

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        # The static site is served from another origin
        resp.headers["Access-Control-Allow-Origin"] = "*"
        resp.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        resp.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return resp


    register_cli(app)


    return app

#-------------------------
import click
from stores import get_store

def register_cli(app):
    @app.cli.command("create-tables")
    def create_tables():
        """Create the tables for the configured storage backend."""
        db.create_all()
        result = get_store().create_schema()
        print(f"Tables ready for {app.config['STORAGE_BACKEND']} backend" + (f": {', '.join(result)}" if result else ""))

    @app.cli.command("seed-sample-data")
    @click.option("--force", is_flag=True, help="Overwrite rooms that already exist.")
    def seed_sample_data(force):
        """Load the sample room catalog."""
        store = get_store()
        if force:
            from utils.seed import SAMPLE_ROOMS
            for room in SAMPLE_ROOMS:
                store.put_room(dict(room))
            print(f"{len(SAMPLE_ROOMS)} rooms written")
            return

        added = seed_rooms(store)
        if not added:
            print("Sample rooms already present")
            return
        print(f"Added rooms: {', '.join(added)}")

#-------------------------




if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5002)
