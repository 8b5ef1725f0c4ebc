from sqlalchemy import update

from library_app.models.book import Book
from library_app.extensions import db

class BookRepo:
    @staticmethod
    def get(book_id: int):
        return db.session.get(Book, book_id)

    @staticmethod
    def list_available():
        return Book.query.filter(Book.available.is_(True)).order_by(Book.title.asc()).all()

    @staticmethod
    def create(book: Book):
        db.session.add(book)
        db.session.commit()
        return book

    @staticmethod
    def mark_unavailable(book_id: int) -> bool:
        """Flip available -> False only if it is still True; no commit."""
        result = db.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.available.is_(True))
            .values(available=False)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
