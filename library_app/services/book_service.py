from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from library_app.errors import MissingFieldError
from library_app.extensions import db
from library_app.models.book import Book
from library_app.repositories.book_repo import BookRepo
from library_app.services.upload_service import UploadService

class BookService:
    @staticmethod
    def list_available_books():
        return BookRepo.list_available()

    @staticmethod
    def add_book(title: str, author: str, image_file=None):
        if not title or not author:
            raise MissingFieldError("Title and author are required")

        uploaded = None
        if UploadService.has_file(image_file):
            uploaded = UploadService.save_image(image_file)

        book = Book(
            title=title,
            author=author,
            image=uploaded or current_app.config["PLACEHOLDER_IMAGE"],
            available=True,
        )
        try:
            BookRepo.create(book)
        except SQLAlchemyError:
            db.session.rollback()
            if uploaded:
                UploadService.discard(uploaded)
            raise

        current_app.logger.info(f"[books] added book_id={book.id} title={book.title!r}")
        return book
