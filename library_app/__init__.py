from flask import Flask
from sqlalchemy.exc import SQLAlchemyError

from library_app.config import Config
from library_app.extensions import db, migrate

from library_app.controllers.web_controller import web_bp
from library_app.controllers.admin_controller import admin_bp
from library_app.controllers.book_controller import book_bp
from library_app.controllers.borrow_controller import borrow_bp
from library_app.db_objects import ensure_db_objects
from library_app.utils.auth import load_current_user


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # 1) db init (db.engine / db.session needed below)
    db.init_app(app)

    # 2) tables + partial unique index
    ensure_db_objects(app)

    # 3) migrations
    migrate.init_app(app, db)

    # 4) session token -> g.user on every request
    app.before_request(load_current_user)

    # 5) blueprints
    app.register_blueprint(web_bp)
    app.register_blueprint(book_bp)
    app.register_blueprint(borrow_bp)
    app.register_blueprint(admin_bp)

    @app.errorhandler(SQLAlchemyError)
    def store_error(e):
        db.session.rollback()
        app.logger.exception(f"[db] store error: {e}")
        return "Server error", 500

    # expired session cleanup
    from library_app.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
