import os

from flask import Blueprint, request, redirect, url_for, flash, current_app, send_from_directory
from werkzeug.security import safe_join

from library_app.errors import LibraryError
from library_app.services.book_service import BookService
from library_app.services.upload_service import UploadService
from library_app.utils.auth import librarian_required

book_bp = Blueprint("books", __name__)


@book_bp.post("/add-book")
@librarian_required
def add_book():
    title = (request.form.get("title") or "").strip()
    author = (request.form.get("author") or "").strip()

    try:
        book = BookService.add_book(title, author, request.files.get("image"))
    except LibraryError as e:
        flash(str(e), "danger")
        return redirect(url_for("web.dashboard"))

    flash(f"'{book.title}' added.", "success")
    return redirect(url_for("web.dashboard"))


@book_bp.get("/images/<path:filename>")
def book_image(filename):
    # uploads first; the placeholder ships in static/images
    folder = UploadService.upload_folder()
    path = safe_join(folder, filename)
    if path and os.path.isfile(path):
        return send_from_directory(folder, filename)
    return send_from_directory(os.path.join(current_app.static_folder, "images"), filename)
