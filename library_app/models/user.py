import enum

from library_app.extensions import db


class Role(str, enum.Enum):
    MEMBER = "member"
    LIBRARIAN = "librarian"


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=Role.MEMBER.value)
