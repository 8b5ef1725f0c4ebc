import pytest
from sqlalchemy.exc import SQLAlchemyError

from library_app.errors import BookUnavailableError, NotBorrowedError, StoreError
from library_app.extensions import db
from library_app.models.book import Book
from library_app.models.borrow_log import BorrowLog
from library_app.repositories.borrow_log_repo import BorrowLogRepo
from library_app.services.auth_service import AuthService
from library_app.services.borrow_service import BorrowService


@pytest.fixture
def users(app):
    with app.app_context():
        alice = AuthService.register("alice", "pw", "member")
        bob = AuthService.register("bob", "pw", "member")
        return {"alice": alice.id, "bob": bob.id}


def _assert_availability_matches_logs():
    for book in Book.query.all():
        open_rows = BorrowLog.query.filter(
            BorrowLog.book_id == book.id, BorrowLog.return_date.is_(None)
        ).count()
        assert open_rows in (0, 1)
        assert book.available == (open_rows == 0), book.title


def test_borrow_marks_unavailable_and_opens_log(app, books, users):
    with app.app_context():
        log = BorrowService.borrow_book(books["Dune"], users["alice"])
        assert log.return_date is None
        assert log.book_title == "Dune"
        assert db.session.get(Book, books["Dune"]).available is False
        _assert_availability_matches_logs()


def test_borrow_unavailable_book_changes_nothing(app, books, users):
    with app.app_context():
        with pytest.raises(BookUnavailableError):
            BorrowService.borrow_book(books["Ulysses"], users["alice"])
        with pytest.raises(BookUnavailableError):
            BorrowService.borrow_book(9999, users["alice"])
        assert BorrowLog.query.count() == 1
        assert db.session.get(Book, books["Ulysses"]).available is False


def test_borrow_twice_fails_second_time(app, books, users):
    with app.app_context():
        BorrowService.borrow_book(books["Dune"], users["alice"])
        with pytest.raises(BookUnavailableError):
            BorrowService.borrow_book(books["Dune"], users["bob"])
        assert BorrowLog.query.count() == 2


def test_open_log_index_blocks_second_open_row(app, books, users):
    with app.app_context():
        # inconsistent row: book flagged available but already has an open loan
        db.session.add(BorrowLog(book_id=books["Dune"], book_title="Dune", user_id=users["bob"]))
        db.session.commit()

        with pytest.raises(BookUnavailableError):
            BorrowService.borrow_book(books["Dune"], users["alice"])

        assert BorrowLog.query.count() == 2
        # rolled back together with the failed insert
        assert db.session.get(Book, books["Dune"]).available is True


def test_borrow_log_failure_rolls_back_update(app, books, users, monkeypatch):
    def boom(log):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(BorrowLogRepo, "add", staticmethod(boom))
    with app.app_context():
        with pytest.raises(StoreError, match="Error logging borrow"):
            BorrowService.borrow_book(books["Dune"], users["alice"])
        assert db.session.get(Book, books["Dune"]).available is True
        assert BorrowLog.query.count() == 1


def test_borrow_then_return(app, books, users):
    with app.app_context():
        BorrowService.borrow_book(books["Dune"], users["alice"])
        log = BorrowService.return_book(books["Dune"], users["alice"])

        assert log.return_date is not None
        assert log.return_date >= log.borrow_date
        assert db.session.get(Book, books["Dune"]).available is True
        rows = BorrowLog.query.filter_by(book_id=books["Dune"], user_id=users["alice"]).all()
        assert len(rows) == 1
        assert rows[0].return_date is not None
        assert BorrowLogRepo.find_open(books["Dune"], users["alice"]) is None


def test_return_by_non_borrower_changes_nothing(app, books, users):
    with app.app_context():
        BorrowService.borrow_book(books["Dune"], users["alice"])
        with pytest.raises(NotBorrowedError):
            BorrowService.return_book(books["Dune"], users["bob"])
        assert db.session.get(Book, books["Dune"]).available is False
        assert BorrowLogRepo.find_open(books["Dune"], users["alice"]) is not None


def test_return_of_never_borrowed_book(app, books, users):
    with app.app_context():
        with pytest.raises(NotBorrowedError):
            BorrowService.return_book(books["Ulysses"], users["alice"])
        assert db.session.get(Book, books["Ulysses"]).available is False


def test_availability_matches_open_logs_over_sequence(app, books, users):
    steps = [
        ("borrow", "Dune", "alice"),
        ("borrow", "Beloved", "bob"),
        ("borrow", "Dune", "bob"),
        ("return", "Dune", "bob"),
        ("return", "Dune", "alice"),
        ("borrow", "Dune", "bob"),
        ("return", "Beloved", "alice"),
        ("return", "Beloved", "bob"),
        ("borrow", "Ulysses", "alice"),
    ]
    with app.app_context():
        for action, title, who in steps:
            op = BorrowService.borrow_book if action == "borrow" else BorrowService.return_book
            try:
                op(books[title], users[who])
            except (BookUnavailableError, NotBorrowedError):
                pass
            _assert_availability_matches_logs()

        assert BorrowLog.query.count() == 4


def test_borrow_route_status_codes(app, member, books):
    assert member.post("/borrow-book", data={"book_id": books["Dune"]}).status_code == 200

    resp = member.post("/borrow-book", data={"book_id": books["Dune"]})
    assert resp.status_code == 400
    assert resp.data == b"Book unavailable"

    assert member.post("/borrow-book", data={}).status_code == 400
    assert member.post("/borrow-book", data={"book_id": "abc"}).status_code == 400


def test_borrow_route_requires_login(client, books):
    resp = client.post("/borrow-book", data={"book_id": books["Dune"]})
    assert resp.status_code == 401
    assert resp.data == b"Unauthorized"


def test_borrow_route_store_error_is_500(member, books, monkeypatch):
    def boom(book_id):
        raise SQLAlchemyError("locked")

    from library_app.repositories.book_repo import BookRepo
    monkeypatch.setattr(BookRepo, "mark_unavailable", staticmethod(boom))

    resp = member.post("/borrow-book", data={"book_id": books["Dune"]})
    assert resp.status_code == 500
    assert resp.data == b"Error updating book"


def test_return_route_redirects_to_my_books(member, books):
    member.post("/borrow-book", data={"book_id": books["Dune"]})
    resp = member.post("/return-book", data={"book_id": books["Dune"]})
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/my-books")

    page = member.get("/my-books")
    assert b"Book returned." in page.data


def test_return_route_not_borrowed_flashes(member, books):
    resp = member.post("/return-book", data={"book_id": books["Beloved"]}, follow_redirects=True)
    assert resp.status_code == 200
    assert b"You have not borrowed this book" in resp.data
