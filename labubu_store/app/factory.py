from __future__ import annotations

import logging
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from labubu_store.app.config import Config
from labubu_store.app.extensions import cors, catalog
from labubu_store.app.common.errors import INTERNAL_ERROR, NOT_FOUND, ApiError, error_payload
from labubu_store.app.common.request_context import current_request_id, echo_request_id, init_request_id
from labubu_store.app.api.register import register_api_blueprints
from labubu_store.app.cli import cli_bp


def create_app(config_object: type[Config] = Config) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object)
    app.json.sort_keys = False

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    # Extensions
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS") or "*"}})
    catalog.init_app(app)

    # Request id
    @app.before_request
    def _before_request():
        init_request_id()

    app.after_request(echo_request_id)

    @app.get("/health")
    def health():
        return {"status": "ok", "products": len(catalog.repository)}, 200

    register_api_blueprints(app)

    # CLI (flask catalog ...)
    app.register_blueprint(cli_bp)

    @app.get("/")
    def index():
        return (
            "<h1>Labubu Store</h1><p>Server is running. Visit <a href='/api'>/api</a>.</p>",
            200,
            {"Content-Type": "text/html"},
        )

    # Error handlers
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        if err.status_code >= 500:
            app.logger.error("%s: %s", err.code, err.message)
        return jsonify(err.to_dict(current_request_id())), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        # Normalize Werkzeug errors into our JSON shape
        code = NOT_FOUND if err.code == 404 else "http_error"
        payload = error_payload(code, err.description, {"name": err.name}, current_request_id())
        return jsonify(payload), err.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        app.logger.exception("Unhandled exception (request %s)", current_request_id())
        payload = error_payload(INTERNAL_ERROR, "Internal server error", request_id=current_request_id())
        return jsonify(payload), 500

    return app
