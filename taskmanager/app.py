import logging
import time

from flask import Flask, g, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from taskmanager import context
from taskmanager.logging_setup import setup_logging
from taskmanager.utils import auth, db, limiter
from taskmanager.utils.errors import ApiError, ConfigurationError, InternalError
from taskmanager.utils.responses import failure


logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


def create_app(config_object="taskmanager.config.Config", **overrides):
    """Build the Flask app.

    Raises ConfigurationError when no JWT signing secret is configured and
    DatabaseUnavailableError when the database stays unreachable after the
    startup retries; in both cases nothing is served.
    """
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config.update(overrides)

    if not app.testing:
        setup_logging(app.config["LOG_LEVEL"], app.config.get("LOG_FILE"))

    if not app.config.get("JWT_SECRET_KEY"):
        raise ConfigurationError("JWT_SECRET_KEY environment variable is required")

    # Core extensions
    CORS(
        app,
        resources={r"/api/*": {}, r"/health": {}},
        origins=[app.config["FRONTEND_URL"]],
        supports_credentials=True,
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        max_age=86400,
    )
    auth.init_app(app)
    limiter.init_app(app)
    db.init_app(app)

    # Register blueprints
    from taskmanager.routes.auth_routes import auth_bp
    from taskmanager.routes.system_routes import system_bp
    from taskmanager.routes.task_routes import tasks_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")
    app.register_blueprint(system_bp)

    _register_hooks(app)
    _register_error_handlers(app)

    context.install(app).start()
    logger.info("Task Manager API ready (env=%s)", app.config["ENV"])
    return app


def _register_hooks(app):
    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def finish_request(response):
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        started = g.get("request_started")
        if started is not None:
            duration_ms = (time.perf_counter() - started) * 1000
            logger.info(
                "%s %s %s - %dms",
                request.method,
                request.full_path.rstrip("?"),
                response.status_code,
                duration_ms,
            )
        return response


def _register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return failure(error)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if error.code == 404:
            return jsonify(
                success=False,
                message="Route not found",
                code="ROUTE_NOT_FOUND",
                requestedUrl=request.path,
                method=request.method,
            ), 404
        if error.code == 429:
            return failure(limiter.rate_limit_error())
        if error.code == 405:
            return jsonify(
                success=False,
                message="Method not allowed",
                code="METHOD_NOT_ALLOWED",
            ), 405
        return jsonify(
            success=False,
            message=error.description,
            code=error.name.upper().replace(" ", "_"),
        ), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        message = str(error) if app.config["ENV"] == "development" else None
        return failure(InternalError(message or "Internal server error"))
