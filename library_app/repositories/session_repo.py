from datetime import datetime

from library_app.models.user_session import UserSession
from library_app.extensions import db

class SessionRepo:
    @staticmethod
    def get_by_token(token: str):
        return UserSession.query.filter_by(token=token).first()

    @staticmethod
    def create(row: UserSession):
        db.session.add(row)
        db.session.commit()
        return row

    @staticmethod
    def delete(row: UserSession):
        db.session.delete(row)
        db.session.commit()

    @staticmethod
    def delete_expired(now: datetime) -> int:
        deleted = UserSession.query.filter(UserSession.expires_at <= now).delete(synchronize_session=False)
        db.session.commit()
        return deleted
