import os


def _csv_set(value: str) -> set:
    return {x.strip().lower() for x in value.split(",") if x.strip()}


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "librarysecret")

    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///library.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # cookie only carries the opaque token; the session itself lives in user_sessions
    SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "library_session")
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "0") == "1"
    SESSION_LIFETIME_MINUTES = int(os.getenv("SESSION_LIFETIME_MINUTES", "120"))

    # None -> <static folder>/images
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER")
    ALLOWED_IMAGE_EXTENSIONS = _csv_set(os.getenv("ALLOWED_IMAGE_EXTENSIONS", "png,jpg,jpeg,gif,webp"))
    PLACEHOLDER_IMAGE = os.getenv("PLACEHOLDER_IMAGE", "book_placeholder.jpg")
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(5 * 1024 * 1024)))

    AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES", "1") == "1"

    SCHEDULER_ENABLED = os.getenv("SCHEDULER_ENABLED", "1") == "1"
    SESSION_PURGE_INTERVAL_MINUTES = int(os.getenv("SESSION_PURGE_INTERVAL_MINUTES", "15"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SCHEDULER_ENABLED = False
