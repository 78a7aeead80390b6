from flask import Flask, request, jsonify, current_app
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from dotenv import load_dotenv
from flask_migrate import Migrate
from flask_compress import Compress
import logging

# Load environment variables early so config is available for blueprint creation
load_dotenv()

from quizportal.config import config

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
compress = Compress()


def _is_api_path(path: str) -> bool:
    from quizportal.config import config as app_config
    return path.startswith(app_config.API_PREFIX + "/") or path.startswith(app_config.AUTH_API_PREFIX + "/")


def create_app(overrides: dict | None = None) -> Flask:
    """
    Application factory for the Flask app.
    Loads environment variables, configures the database,
    and registers blueprints.

    Args:
        overrides: Optional Flask config values applied last (tests use this
            to point SQLAlchemy at an in-memory database).
    """
    # Re-initialize config to ensure latest .env values are loaded
    from quizportal.config import Config
    global config
    config = Config()

    # Validate configuration
    config.validate()

    app = Flask(__name__)

    app.config["SECRET_KEY"] = config.SECRET_KEY
    db_uri = config.SQLALCHEMY_DATABASE_URI
    app.config["SQLALCHEMY_DATABASE_URI"] = db_uri
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = config.SQLALCHEMY_TRACK_MODIFICATIONS
    app.config["SQLALCHEMY_ECHO"] = config.SQLALCHEMY_ECHO
    if db_uri.startswith("mysql"):
        # Database connection pooling for MySQL deployments
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
            "pool_size": 10,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "max_overflow": 20,
        }

    # Response compression settings
    app.config["COMPRESS_MIMETYPES"] = ['application/json']
    app.config["COMPRESS_LEVEL"] = 6
    app.config["COMPRESS_MIN_SIZE"] = 500
    app.config["SESSION_COOKIE_SECURE"] = config.SESSION_COOKIE_SECURE
    app.config["SESSION_COOKIE_HTTPONLY"] = config.SESSION_COOKIE_HTTPONLY
    app.config["SESSION_COOKIE_SAMESITE"] = config.SESSION_COOKIE_SAMESITE
    app.config["SEED_DEMO_USERS"] = config.SEED_DEMO_USERS

    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    compress.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        from quizportal.auth.models import User
        try:
            return db.session.get(User, int(user_id))
        except (ValueError, TypeError):
            return None

    @login_manager.unauthorized_handler
    def handle_unauthorized():
        from quizportal.security import SecurityLogger
        SecurityLogger.log_unauthorized_access(request.path)
        return jsonify({'success': False, 'error': 'Authentication required'}), 401

    @app.route("/")
    def index():
        return jsonify({
            "status": "ok",
            "message": "Quiz portal API is running",
            "api_prefix": config.API_PREFIX,
            "auth_api_prefix": config.AUTH_API_PREFIX,
        }), 200

    # Register blueprints
    from quizportal.auth import auth_bp
    app.register_blueprint(auth_bp)

    from quizportal.quiz import quiz_bp
    app.register_blueprint(quiz_bp)

    # Custom error handlers for API routes to return JSON instead of HTML
    @app.errorhandler(404)
    def handle_404(e):
        """Handle 404 errors - return JSON for API routes."""
        path = request.path
        method = request.method
        current_app.logger.warning(f"404 error: {method} {path}")
        if _is_api_path(path):
            return jsonify({
                'success': False,
                'error': f'Route not found: {method} {path}',
                'path': path,
                'method': method
            }), 404
        return f"Page not found: {path}", 404

    @app.errorhandler(405)
    def handle_405(e):
        """Handle 405 Method Not Allowed - return JSON for API routes."""
        path = request.path
        method = request.method
        current_app.logger.warning(f"405 error: {method} {path}")
        if _is_api_path(path):
            return jsonify({
                'success': False,
                'error': f'Method not allowed: {method} {path}',
                'path': path,
                'method': method
            }), 405
        return e

    # Create tables if they do not exist
    with app.app_context():
        from quizportal.auth.models import User
        from quizportal.quiz.models import Quiz, Question, Submission  # noqa: F401
        db.create_all()
        if app.config.get("SEED_DEMO_USERS"):
            from quizportal.auth.utils import seed_demo_users
            seed_demo_users()

    return app
