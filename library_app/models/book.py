from library_app.extensions import db


class Book(db.Model):
    __tablename__ = "books"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    author = db.Column(db.String(200), nullable=False)
    image = db.Column(db.String(255), nullable=False)

    # toggled only by BorrowService
    available = db.Column(db.Boolean, nullable=False, default=True)
