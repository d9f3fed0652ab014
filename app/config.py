import os


def _env_flag(name: str, default: str = "1") -> bool:
    return (os.getenv(name, default) or "").strip().lower() in ("1", "true", "yes", "on")


class Config:
    raw_db_url = os.getenv("DATABASE_URL")

    if raw_db_url:
        if raw_db_url.startswith("postgres://"):
            raw_db_url = raw_db_url.replace("postgres://", "postgresql://", 1)
        SQLALCHEMY_DATABASE_URI = raw_db_url
    else:
        SQLALCHEMY_DATABASE_URI = "sqlite:///pickup.db"

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me-dev-secret")

    # The single "current user" when nobody has picked one in the session
    DEFAULT_USER_ID = os.getenv("DEFAULT_USER_ID", "user-1")
    DEFAULT_USER_NAME = os.getenv("DEFAULT_USER_NAME", "You")
    DEFAULT_USER_CONTACT = os.getenv("DEFAULT_USER_CONTACT", "555-0100")

    SEED_SAMPLE_ROSTER = _env_flag("SEED_SAMPLE_ROSTER")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SECRET_KEY = "test-secret"
    SEED_SAMPLE_ROSTER = False
