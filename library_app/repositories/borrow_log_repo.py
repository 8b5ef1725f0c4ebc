from library_app.models.book import Book
from library_app.models.borrow_log import BorrowLog
from library_app.models.user import User
from library_app.extensions import db


class BorrowLogRepo:
    @staticmethod
    def add(log: BorrowLog):
        db.session.add(log)
        db.session.flush()
        return log

    @staticmethod
    def find_open(book_id: int, user_id: int):
        # most recent open loan of this book by this user
        return (
            BorrowLog.query
            .filter(
                BorrowLog.book_id == book_id,
                BorrowLog.user_id == user_id,
                BorrowLog.return_date.is_(None),
            )
            .order_by(BorrowLog.borrow_date.desc(), BorrowLog.id.desc())
            .first()
        )

    @staticmethod
    def list_open_with_user():
        return (
            db.session.query(BorrowLog, User.username)
            .join(BorrowLog.user)
            .filter(BorrowLog.return_date.is_(None))
            .order_by(BorrowLog.borrow_date.desc(), BorrowLog.id.desc())
            .all()
        )

    @staticmethod
    def list_all_with_user():
        return (
            db.session.query(BorrowLog, User.username)
            .join(BorrowLog.user)
            .order_by(BorrowLog.borrow_date.desc(), BorrowLog.id.desc())
            .all()
        )

    @staticmethod
    def list_open_books_for_user(user_id: int):
        return (
            db.session.query(Book)
            .select_from(BorrowLog)
            .join(BorrowLog.book)
            .filter(BorrowLog.user_id == user_id, BorrowLog.return_date.is_(None))
            .order_by(BorrowLog.borrow_date.desc())
            .all()
        )
