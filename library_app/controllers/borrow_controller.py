from flask import Blueprint, request, redirect, url_for, flash, render_template

from library_app.errors import BookUnavailableError, LibraryError, StoreError
from library_app.services.borrow_service import BorrowService
from library_app.utils.auth import current_user, login_required

borrow_bp = Blueprint("borrow", __name__)


def _form_book_id():
    try:
        return int(request.form.get("book_id"))
    except (TypeError, ValueError):
        return None


@borrow_bp.post("/borrow-book")
def borrow_book():
    user = current_user()
    if user is None:
        return "Unauthorized", 401

    book_id = _form_book_id()
    if book_id is None:
        return "book_id is required", 400

    try:
        BorrowService.borrow_book(book_id, user.user_id)
        return "Borrowed successfully", 200
    except BookUnavailableError as e:
        return str(e), 400
    except StoreError as e:
        return str(e), 500


@borrow_bp.post("/return-book")
@login_required
def return_book():
    book_id = _form_book_id()
    if book_id is None:
        flash("book_id is required", "danger")
        return redirect(url_for("borrow.my_books"))

    try:
        BorrowService.return_book(book_id, current_user().user_id)
        flash("Book returned.", "success")
    except LibraryError as e:
        flash(str(e), "danger")
    return redirect(url_for("borrow.my_books"))


@borrow_bp.get("/my-books")
@login_required
def my_books():
    user = current_user()
    books = BorrowService.my_borrowed_books(user.user_id)
    return render_template("my_books.html", user=user, borrowed_books=books)
