import secrets
from datetime import datetime, timedelta

from flask import current_app

from library_app.models.user import User
from library_app.models.user_session import UserSession
from library_app.repositories.session_repo import SessionRepo


class SessionService:
    @staticmethod
    def start(user: User) -> str:
        now = datetime.utcnow()
        lifetime = timedelta(minutes=current_app.config["SESSION_LIFETIME_MINUTES"])
        row = UserSession(
            token=secrets.token_urlsafe(32),
            user_id=user.id,
            username=user.username,
            role=user.role,
            created_at=now,
            expires_at=now + lifetime,
        )
        SessionRepo.create(row)
        return row.token

    @staticmethod
    def resolve(token):
        """Return the live session for ``token``; expired rows are dropped on sight."""
        if not token:
            return None
        row = SessionRepo.get_by_token(token)
        if row is None:
            return None
        if row.is_expired(datetime.utcnow()):
            SessionRepo.delete(row)
            current_app.logger.info(f"[sessions] expired session for user_id={row.user_id}")
            return None
        return row

    @staticmethod
    def end(token) -> None:
        if not token:
            return
        row = SessionRepo.get_by_token(token)
        if row is not None:
            SessionRepo.delete(row)

    @staticmethod
    def purge_expired(now: datetime = None) -> int:
        return SessionRepo.delete_expired(now or datetime.utcnow())
