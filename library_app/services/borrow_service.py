from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from library_app.errors import BookUnavailableError, NotBorrowedError, StoreError
from library_app.extensions import db
from library_app.models.borrow_log import BorrowLog
from library_app.repositories.book_repo import BookRepo
from library_app.repositories.borrow_log_repo import BorrowLogRepo


class BorrowService:
    """
    Available <-> Borrowed transitions for a single book.

    Each transition is one transaction: either both the books row and the
    logs row change, or neither does. Together with the partial unique
    index on logs this keeps `book.available` equal to "no open log row".
    """

    @staticmethod
    def borrow_book(book_id: int, user_id: int) -> BorrowLog:
        book = BookRepo.get(book_id)
        if not book or not book.available:
            raise BookUnavailableError()

        try:
            changed = BookRepo.mark_unavailable(book_id)
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.exception(f"[borrow] update failed book_id={book_id}: {e}")
            raise StoreError("Error updating book")

        if not changed:
            # someone else borrowed it between the read and the update
            db.session.rollback()
            raise BookUnavailableError()

        log = BorrowLog(
            book_id=book.id,
            book_title=book.title,
            user_id=user_id,
            borrow_date=datetime.utcnow(),
            return_date=None,
        )
        try:
            BorrowLogRepo.add(log)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise BookUnavailableError()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.exception(f"[borrow] log insert failed book_id={book_id}: {e}")
            raise StoreError("Error logging borrow")

        current_app.logger.info(f"[borrow] user_id={user_id} borrowed book_id={book_id} log_id={log.id}")
        return log

    @staticmethod
    def return_book(book_id: int, user_id: int) -> BorrowLog:
        log = BorrowLogRepo.find_open(book_id, user_id)
        if not log:
            raise NotBorrowedError()

        log.return_date = datetime.utcnow()
        book = BookRepo.get(book_id)
        if book:
            book.available = True

        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.exception(f"[borrow] return failed book_id={book_id}: {e}")
            raise StoreError("Error returning book")

        current_app.logger.info(f"[borrow] user_id={user_id} returned book_id={book_id} log_id={log.id}")
        return log

    @staticmethod
    def my_borrowed_books(user_id: int):
        return BorrowLogRepo.list_open_books_for_user(user_id)
