from datetime import datetime
from library_app.extensions import db


class BorrowLog(db.Model):
    __tablename__ = "logs"
    __table_args__ = (
        # at most one open loan per book
        db.Index(
            "uq_logs_open_book",
            "book_id",
            unique=True,
            sqlite_where=db.text("return_date IS NULL"),
            postgresql_where=db.text("return_date IS NULL"),
        ),
    )

    id = db.Column(db.Integer, primary_key=True)

    book_id = db.Column(db.Integer, nullable=False, index=True)
    book_title = db.Column(db.String(200), nullable=False)
    user_id = db.Column(db.Integer, nullable=False, index=True)

    borrow_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    return_date = db.Column(db.DateTime, nullable=True)

    # no FK constraints on logs; joins are declared here instead
    user = db.relationship("User", primaryjoin="foreign(BorrowLog.user_id) == User.id", viewonly=True)
    book = db.relationship("Book", primaryjoin="foreign(BorrowLog.book_id) == Book.id", viewonly=True)
