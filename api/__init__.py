import logging
import time

from flask import Flask, g, request
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config, TokenSettings
from .errors import register_error_handlers
from models import storage  # DBStorage singleton (scoped_session)

logger = logging.getLogger(__name__)

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Tailor Shop API",
        "version": "1.0.0",
        "description": "REST API for tailoring businesses: user accounts, customers and their measurements.",
    },
    "basePath": "/",
    "schemes": ["http", "https"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the access token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger().setLevel(level)


def register_request_logging(app: Flask) -> None:
    """One access-log line per request, like a morgan/combined logger."""

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        if not app.config.get("TESTING"):
            started = g.get("request_started")
            duration_ms = (time.perf_counter() - started) * 1000 if started else 0.0
            logger.info(
                "%s %s %s %s - %.1f ms",
                request.method, request.path, response.status_code,
                response.calculate_content_length() or "-", duration_ms,
            )
        return response


def create_app(config_name: str | None = None, overrides: dict | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    `overrides` is applied on top of the selected config class (used by tests).
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))
    if overrides:
        app.config.update(overrides)

    configure_logging(app)

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers that return the uniform error envelope
    register_error_handlers(app)
    register_request_logging(app)

    storage.reload(app.config["DATABASE_URL"], echo=app.config.get("SQL_ECHO", False))

    # Services are built once from an immutable settings value
    from services.auth import AuthService
    from services.customers import CustomerService
    from services.sessions import SessionStore
    from utils.security import TokenCodec

    settings = TokenSettings.from_config(app.config)
    codec = TokenCodec(settings)
    sessions = SessionStore(storage, settings)
    app.extensions["auth_service"] = AuthService(storage, codec, sessions)
    app.extensions["customer_service"] = CustomerService(storage)

    from .health import bp as health_bp
    from .auth import bp as auth_bp
    from .users import bp as users_bp
    from .customers import bp as customers_bp
    from .measurements import bp as measurements_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(users_bp, url_prefix="/api")
    app.register_blueprint(customers_bp, url_prefix="/api")
    app.register_blueprint(measurements_bp, url_prefix="/api")

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # Calls scoped_session.remove(), preventing connection leaks
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Tailor Shop API",
            "docs": "/apidocs/",
            "health": "/health",
        }, 200

    logger.info("Application created (env=%s)", app.config.get("APP_ENV"))
    return app
