from flask import Blueprint, render_template, request, redirect, url_for, session, flash, current_app

from library_app.errors import LibraryError
from library_app.models.user import Role
from library_app.services.auth_service import AuthService
from library_app.services.book_service import BookService
from library_app.services.report_service import ReportService
from library_app.services.session_service import SessionService
from library_app.utils.auth import SESSION_TOKEN_KEY, current_user, login_required

web_bp = Blueprint("web", __name__)


@web_bp.get("/")
def root():
    return redirect(url_for("web.login_page"))


@web_bp.route("/login", methods=["GET", "POST"])
def login_page():
    if request.method == "GET":
        if current_user() is not None:
            return redirect(url_for("web.dashboard"))
        return render_template("login.html")

    username = (request.form.get("username") or "").strip()
    password = request.form.get("password") or ""

    try:
        user = AuthService.login(username, password)
    except LibraryError as e:
        flash(str(e), "danger")
        return redirect(url_for("web.login_page"))

    # drop whatever session the browser had before
    SessionService.end(session.get(SESSION_TOKEN_KEY))
    session.clear()
    session[SESSION_TOKEN_KEY] = SessionService.start(user)
    return redirect(url_for("web.dashboard"))


@web_bp.route("/register", methods=["GET", "POST"])
def register_page():
    if request.method == "GET":
        return render_template("register.html", roles=[r.value for r in Role])

    username = (request.form.get("username") or "").strip()
    password = request.form.get("password") or ""
    role = request.form.get("role") or Role.MEMBER.value

    try:
        AuthService.register(username=username, password=password, role=role)
    except LibraryError as e:
        flash(str(e), "danger")
        return redirect(url_for("web.register_page"))

    flash("Registration successful, you can log in now.", "success")
    return redirect(url_for("web.login_page"))


@web_bp.get("/logout")
def logout():
    token = session.get(SESSION_TOKEN_KEY)
    SessionService.end(token)
    session.clear()
    if token:
        current_app.logger.info("[auth] logout")
    return redirect(url_for("web.login_page"))


@web_bp.get("/dashboard")
@login_required
def dashboard():
    user = current_user()
    books = BookService.list_available_books()
    borrowed_books = ReportService.list_open_borrows_with_user() if user.is_librarian else []
    return render_template("dashboard.html", user=user, books=books, borrowed_books=borrowed_books)
