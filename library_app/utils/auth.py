from functools import wraps
from flask import session, redirect, url_for, g, flash

from library_app.services.session_service import SessionService

SESSION_TOKEN_KEY = "session_token"


def load_current_user():
    """before_request: session cookie token -> g.user (UserSession snapshot) or None."""
    token = session.get(SESSION_TOKEN_KEY)
    g.user = SessionService.resolve(token)
    if token and g.user is None:
        # stale or expired token
        session.clear()


def current_user():
    return g.get("user")


def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if current_user() is None:
            return redirect(url_for("web.login_page"))
        return view(*args, **kwargs)
    return wrapped


def librarian_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        user = current_user()
        if user is None:
            return redirect(url_for("web.login_page"))
        if not user.is_librarian:
            flash("This page is for librarians only.", "danger")
            return redirect(url_for("web.dashboard"))
        return view(*args, **kwargs)
    return wrapped
