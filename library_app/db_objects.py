from library_app.extensions import db


def ensure_db_objects(app):
    """
    Creates missing tables and indexes, including the partial unique index
    uq_logs_open_book (one open loan per book). Existing tables are left as-is;
    schema changes go through Flask-Migrate.
    """
    if not app.config.get("AUTO_CREATE_TABLES"):
        return

    # models must be imported so their tables are in db.metadata
    from library_app.models import book, borrow_log, user, user_session  # noqa: F401

    with app.app_context():
        db.create_all()
        app.logger.info("[db] tables ensured")
