# library_app/tasks/session_cleanup.py
from datetime import datetime

from library_app.services.session_service import SessionService


def run_session_cleanup_job(app) -> int:
    """
    Deletes user_sessions rows whose expires_at has passed.
    Expired rows are already ignored by the guard; this only keeps the table small.
    """
    with app.app_context():
        deleted = SessionService.purge_expired(datetime.utcnow())
        if deleted:
            app.logger.info(f"[sessions] purged {deleted} expired session(s)")
        return deleted
