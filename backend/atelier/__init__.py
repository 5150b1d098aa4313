import logging
import os

import colorlog
from flask import Flask, abort, send_file, send_from_directory, current_app
from flask.logging import default_handler
from flask_swagger_ui import get_swaggerui_blueprint

from .config import config_by_name, validate_environment
from .extensions import db, migrate, jwt, bcrypt, cors
from .api import api_bp
from .errors import register_error_handlers, register_jwt_handlers
from .utils.media import UPLOAD_SUBDIRS
from . import commands


def create_app(config_name: str | None = None) -> Flask:
    config_name = config_name or os.getenv("NODE_ENV", "development")
    config_class = config_by_name.get(config_name)

    # unknown names are reported together with every other problem
    if config_class is None or config_class.VALIDATE_ENVIRONMENT:
        validate_environment({**os.environ, "NODE_ENV": config_name})

    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config.update(config_class.from_env(os.environ))

    configure_logging(app)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )
    register_jwt_handlers(jwt)

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(api_bp, url_prefix="/api")
    register_error_handlers(app)
    register_uploads(app)
    register_commands(app)

    # -------------------------------------------------
    # Serve OpenAPI YAML
    # -------------------------------------------------
    @app.route("/api/openapi.yaml", methods=["GET"], endpoint="openapi")
    def serve_openapi():
        spec_path = os.path.join(current_app.root_path, "api", "openapi.yaml")

        if not os.path.exists(spec_path):
            abort(404, description="openapi.yaml not found")

        return send_file(
            spec_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    if app.config["ENABLE_DOCS"]:
        SWAGGER_URL = "/api/docs"
        API_URL = "/api/openapi.yaml"

        swaggerui_blueprint = get_swaggerui_blueprint(
            SWAGGER_URL,
            API_URL,
            config={
                "app_name": "Atelier Kaisla API",
                "deepLinking": True,
                "persistAuthorization": True,
            },
        )

        app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    port = app.config["PORT"]
    app.logger.info("Backend API is running on: http://localhost:%s/api", port)
    if app.config["ENABLE_DOCS"]:
        app.logger.info("API Documentation: http://localhost:%s/api/docs", port)
    app.logger.info("Environment: %s", app.config["NODE_ENV"])
    app.logger.info("Database: %s", app.config["DATABASE_NAME"])

    return app


def register_uploads(app):
    """Serve stored images at /uploads/<subdir>/<filename>."""

    @app.route("/uploads/<subdir>/<path:filename>", methods=["GET"], endpoint="uploads")
    def serve_upload(subdir, filename):
        if subdir not in UPLOAD_SUBDIRS:
            abort(404)
        return send_from_directory(
            os.path.join(current_app.config["UPLOAD_FOLDER"], subdir),
            filename,
        )


def register_commands(app):
    app.cli.add_command(commands.init_db)
    app.cli.add_command(commands.seed)
    app.cli.add_command(commands.seed_users_command)


def configure_logging(app):
    """Coloured console logging for app.logger."""
    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG if app.debug else logging.INFO)

    formatter = colorlog.ColoredFormatter(
        "%(log_color)s[%(asctime)s] %(levelname)-8s%(reset)s %(blue)s%(name)s%(reset)s %(message)s",
        datefmt="%H:%M:%S",
        reset=True,
        log_colors={
            'DEBUG':    'cyan',
            'INFO':     'green',
            'WARNING':  'yellow',
            'ERROR':    'red',
            'CRITICAL': 'red,bg_white',
        },
        style='%'
    )
    handler.setFormatter(formatter)

    # create_app may run several times in one process (tests)
    app.logger.removeHandler(default_handler)
    app.logger.handlers = [
        h for h in app.logger.handlers if not isinstance(h.formatter, colorlog.ColoredFormatter)
    ]
    app.logger.addHandler(handler)
    app.logger.setLevel(logging.DEBUG if app.debug else logging.INFO)
