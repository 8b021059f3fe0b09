import atexit
import logging

from flask import Flask, request
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config, DEFAULT_ACCESS_SECRET, DEFAULT_REFRESH_SECRET
from .errors import register_error_handlers
from models import storage  # DBStorage singleton (scoped_session)
from models.session_store import MemorySessionStore
from services.session_service import SessionService
from services.sweeper import ExpirySweeper
from services.user_directory import SqlUserDirectory
from utils.security import TokenCodec

logger = logging.getLogger(__name__)

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0.0",
    "info": {
        "title": "Marketplace API",
        "version": "1.0.0",
        "description": "REST API for logging in, browsing products, keeping a cart and placing orders.",
    },
    "basePath": "/",  # blueprints are mounted under /api/v1
    "schemes": ["http"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
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


def build_session_service(config) -> SessionService:
    """Wire the token codec, the in-memory session store and the user directory."""
    codec = TokenCodec(
        access_secret=config["JWT_ACCESS_SECRET"],
        refresh_secret=config["JWT_REFRESH_SECRET"],
        access_ttl=config["JWT_ACCESS_EXPIRES"],
        refresh_ttl=config["JWT_REFRESH_EXPIRES"],
        algorithm=config["JWT_ALGORITHM"],
        issuer=config["JWT_ISSUER"],
    )
    return SessionService(SqlUserDirectory(storage), codec, MemorySessionStore())


def create_app(config_name: str | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    Each app gets its own, initially empty, session store; refresh tokens do
    not survive a restart.
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))

    if not app.debug and not app.testing and (
        app.config["JWT_ACCESS_SECRET"] == DEFAULT_ACCESS_SECRET
        or app.config["JWT_REFRESH_SECRET"] == DEFAULT_REFRESH_SECRET
    ):
        logger.warning("Running with a default JWT secret; set JWT_ACCESS_SECRET and JWT_REFRESH_SECRET")

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers that return the uniform error envelope
    register_error_handlers(app)

    service = build_session_service(app.config)
    app.extensions["session_service"] = service

    if app.config["SESSION_SWEEPER_ENABLED"]:
        sweeper = ExpirySweeper(
            service.store, interval=app.config["SESSION_SWEEP_INTERVAL"].total_seconds()
        )
        sweeper.start()
        atexit.register(sweeper.stop)
        app.extensions["session_sweeper"] = sweeper

    from .health import bp as health_bp
    from .auth import bp as auth_bp
    from .products import bp as products_bp
    from .cart import bp as cart_bp
    from .orders import bp as orders_bp
    from .cli import seed_command

    app.register_blueprint(health_bp, url_prefix="/api/v1")
    app.register_blueprint(auth_bp, url_prefix="/api/v1/auth")
    app.register_blueprint(products_bp, url_prefix="/api/v1")
    app.register_blueprint(cart_bp, url_prefix="/api/v1")
    app.register_blueprint(orders_bp, url_prefix="/api/v1")
    app.cli.add_command(seed_command)

    @app.before_request
    def log_request():
        logger.info("%s %s", request.method, request.path)

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # This calls scoped_session.remove(), preventing connection leaks
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Marketplace API",
            "docs": "/apidocs/",
            "health": "/api/v1/health",
        }, 200

    return app
