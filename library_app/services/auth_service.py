from flask import current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash, check_password_hash

from library_app.errors import (
    InvalidCredentialsError,
    InvalidRoleError,
    MissingFieldError,
    UsernameConflictError,
)
from library_app.extensions import db
from library_app.models.user import Role, User
from library_app.repositories.user_repo import UserRepo

class AuthService:
    @staticmethod
    def parse_role(value) -> Role:
        try:
            return Role((value or Role.MEMBER.value).strip().lower())
        except ValueError:
            raise InvalidRoleError(f"Unknown role: {value}")

    @staticmethod
    def register(username: str, password: str, role: str = Role.MEMBER.value):
        if not username or not password:
            raise MissingFieldError("Username and password are required")

        parsed_role = AuthService.parse_role(role)

        if UserRepo.get_by_username(username):
            raise UsernameConflictError()

        user = User(
            username=username,
            password_hash=generate_password_hash(password),
            role=parsed_role.value
        )
        try:
            UserRepo.create(user)
        except IntegrityError:
            # lost the race against a concurrent registration
            db.session.rollback()
            raise UsernameConflictError()

        current_app.logger.info(f"[auth] registered user={user.username} role={user.role}")
        return user

    @staticmethod
    def login(username: str, password: str):
        if not username or not password:
            raise MissingFieldError("Username and password are required")

        user = UserRepo.get_by_username(username)
        if not user or not check_password_hash(user.password_hash, password):
            current_app.logger.info(f"[auth] failed login for username={username}")
            raise InvalidCredentialsError()

        current_app.logger.info(f"[auth] login user_id={user.id}")
        return user
