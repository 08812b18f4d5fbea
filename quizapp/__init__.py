from flask import Flask, jsonify, request
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_compress import Compress
from dotenv import load_dotenv
from sqlalchemy import event
from sqlalchemy.engine import Engine
import logging
import sqlite3

# Load environment variables early so config is available for blueprint creation
load_dotenv()

from quizapp.config import config

db = SQLAlchemy()
migrate = Migrate()
compress = Compress()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_app(config_overrides: dict = None) -> Flask:
    """
    Application factory for the Flask app.
    Loads environment variables, configures the database,
    and registers blueprints.
    """
    # Re-initialize config to ensure latest .env values are loaded
    from quizapp.config import Config
    global config
    config = Config()

    # Validate configuration
    config.validate()

    app = Flask(__name__)

    # Load configuration from config module
    app.config["SECRET_KEY"] = config.SECRET_KEY
    app.config["SQLALCHEMY_DATABASE_URI"] = config.SQLALCHEMY_DATABASE_URI
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = config.SQLALCHEMY_TRACK_MODIFICATIONS
    app.config["SQLALCHEMY_ECHO"] = config.SQLALCHEMY_ECHO

    # Response compression settings
    app.config["COMPRESS_MIMETYPES"] = ['application/json', 'text/plain']
    app.config["COMPRESS_LEVEL"] = 6
    app.config["COMPRESS_MIN_SIZE"] = 500

    if config_overrides:
        app.config.update(config_overrides)

    # Connection pooling only applies to the MySQL deployment
    if app.config["SQLALCHEMY_DATABASE_URI"].startswith("mysql"):
        app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", {
            "pool_size": 10,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "max_overflow": 20,
            "connect_args": {
                "connect_timeout": 5,
                "charset": "utf8mb4",
            }
        })

    app.logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    compress.init_app(app)

    @app.route("/")
    def index():
        return "Quiz WebApp API is running", 200

    # Register quiz blueprint
    from quizapp.quiz import quiz_bp
    app.register_blueprint(quiz_bp)

    # Custom error handlers so API clients always receive JSON
    @app.errorhandler(404)
    def handle_404(e):
        """Handle 404 errors - unknown routes and non-numeric ids."""
        app.logger.warning(f"404 error: {request.method} {request.path}")
        return jsonify({
            'success': False,
            'error': f'Route not found: {request.method} {request.path}'
        }), 404

    @app.errorhandler(405)
    def handle_405(e):
        """Handle 405 Method Not Allowed."""
        app.logger.warning(f"405 error: {request.method} {request.path}")
        return jsonify({
            'success': False,
            'error': f'Method not allowed: {request.method} {request.path}'
        }), 405

    @app.errorhandler(500)
    def handle_500(e):
        """Handle anything that escaped the blueprint handlers."""
        app.logger.error(f"500 error: {request.method} {request.path}: {e}")
        return jsonify({'success': False, 'error': 'Server Error'}), 500

    # Create tables if they do not exist
    with app.app_context():
        from quizapp.quiz import models  # noqa: F401
        db.create_all()

    return app
