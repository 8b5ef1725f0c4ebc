from flask import Blueprint, render_template

from library_app.services.report_service import ReportService
from library_app.utils.auth import current_user, librarian_required

admin_bp = Blueprint("admin", __name__)


@admin_bp.get("/logs")
@librarian_required
def logs():
    return render_template("logs.html", user=current_user(), logs=ReportService.list_logs())


@admin_bp.get("/users")
@librarian_required
def users():
    return render_template("users.html", user=current_user(), users=ReportService.list_users())
