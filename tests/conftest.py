import pytest
from werkzeug.security import generate_password_hash

from library_app import create_app
from library_app.config import TestConfig
from library_app.extensions import db
from library_app.models.book import Book
from library_app.models.borrow_log import BorrowLog
from library_app.models.user import User


@pytest.fixture
def app(tmp_path):
    # fresh sqlite file and upload folder per test
    class _Config(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'library_test.db'}"
        UPLOAD_FOLDER = str(tmp_path / "images")

    app = create_app(_Config)
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


def register(client, username, password="pw", role="member"):
    return client.post("/register", data={"username": username, "password": password, "role": role})


def login(client, username, password="pw"):
    return client.post("/login", data={"username": username, "password": password})


@pytest.fixture
def member(client):
    register(client, "alice", "pw", "member")
    login(client, "alice", "pw")
    return client


@pytest.fixture
def librarian(app):
    c = app.test_client()
    register(c, "libby", "pw", "librarian")
    login(c, "libby", "pw")
    return c


@pytest.fixture
def books(app):
    with app.app_context():
        rows = [
            Book(title="Dune", author="Frank Herbert", image="book_placeholder.jpg", available=True),
            Book(title="Beloved", author="Toni Morrison", image="book_placeholder.jpg", available=True),
            Book(title="Ulysses", author="James Joyce", image="book_placeholder.jpg", available=False),
        ]
        carol = User(username="carol", password_hash=generate_password_hash("pw"), role="member")
        db.session.add_all(rows + [carol])
        db.session.commit()

        # Ulysses is out on loan, so it needs its open log row
        ulysses = rows[2]
        db.session.add(BorrowLog(book_id=ulysses.id, book_title=ulysses.title, user_id=carol.id))
        db.session.commit()
        return {b.title: b.id for b in rows}
