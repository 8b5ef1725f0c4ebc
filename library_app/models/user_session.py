from datetime import datetime
from library_app.extensions import db
from library_app.models.user import Role


class UserSession(db.Model):
    """Server-side login session; the cookie only holds ``token``.

    username/role are a snapshot taken at login and are what the access
    guard checks, so no users lookup happens per request.
    """
    __tablename__ = "user_sessions"

    id = db.Column(db.Integer, primary_key=True)
    token = db.Column(db.String(64), unique=True, nullable=False, index=True)

    user_id = db.Column(db.Integer, nullable=False, index=True)
    username = db.Column(db.String(80), nullable=False)
    role = db.Column(db.String(20), nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)

    @property
    def is_librarian(self) -> bool:
        return self.role == Role.LIBRARIAN.value

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
