from flask import Flask
from .config import Config
from .extensions import db


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)

    from app.routes import register_blueprints
    register_blueprints(app)

    return app


def init_db(app):
    """Ensure DB tables exist, and seed the sample roster if configured."""
    from app.helpers.roster import SqlRosterStore, seed_sample_roster

    with app.app_context():
        db.create_all()

        if app.config.get("SEED_SAMPLE_ROSTER"):
            added = seed_sample_roster(SqlRosterStore())
            if added:
                app.logger.info("Seeded %s sample players", added)
