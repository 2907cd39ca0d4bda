#!/usr/bin/env python3
"""
Flask Application Factory
Includes authentication, CSRF, rate limiting, caching and migrations
"""

import logging
from logging.handlers import RotatingFileHandler

from flask import Flask
from flask_caching import Cache
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_wtf.csrf import CSRFProtect

from config import get_config
from core.models import User, bcrypt, db

# Initialize extensions
login_manager = LoginManager()
csrf = CSRFProtect()
limiter = Limiter(key_func=get_remote_address)
cache = Cache()
migrate = Migrate()

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s]: %(message)s"
LOG_HANDLER_NAME = "team_playbook"


def create_app(config_name: str = None) -> Flask:
    """
    Application factory with full security stack.
    """
    app = Flask(__name__)

    # Load configuration
    config = get_config(config_name)
    app.config.from_object(config)

    # Setup logging
    setup_logging(app, config)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)
    csrf.init_app(app)
    cache.init_app(app)
    limiter.init_app(app)

    # Configure login manager
    login_manager.init_app(app)
    login_manager.login_view = "auth.login"
    login_manager.login_message = "Please log in to access this page."
    login_manager.login_message_category = "info"

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    # Register blueprints
    register_blueprints(app)

    from cli import register_commands

    register_commands(app)

    return app


def setup_logging(app: Flask, config):
    """Configure application logging, rotating to LOG_FILE when one is set"""
    log_level = getattr(logging, config.LOG_LEVEL)

    if config.LOG_FILE:
        handler = RotatingFileHandler(
            config.LOG_FILE,
            maxBytes=config.LOG_MAX_BYTES,
            backupCount=config.LOG_BACKUP_COUNT,
        )
    else:
        handler = logging.StreamHandler()
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.set_name(LOG_HANDLER_NAME)

    # app.logger is the "web" logger; services and routes log through
    # module loggers under core.* and web.*
    for name in ("core", app.logger.name):
        package_logger = logging.getLogger(name)
        package_logger.setLevel(log_level)
        if not any(h.get_name() == LOG_HANDLER_NAME for h in package_logger.handlers):
            package_logger.addHandler(handler)


def register_blueprints(app: Flask):
    """Register all blueprints"""
    # Import blueprints here to avoid circular imports
    from web.routes.api import api_bp
    from web.routes.auth import auth_bp
    from web.routes.main import main_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp, url_prefix="/api/v1")

    # JSON API authenticates with the session cookie and takes JSON bodies
    csrf.exempt(api_bp)
