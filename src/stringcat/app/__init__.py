"""Application factory exposing the string catalog over HTTP."""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import BadRequest

from stringcat.core import CatalogProvider, LocalizationError, UnknownIdentifierError
from stringcat.settings import Settings, load_settings
from stringcat.version import get_project_version

from .context import EXTENSION_KEY, current_provider
from .http import problem_response
from .routes import register_routes

logger = logging.getLogger(__name__)


def create_app(
    provider: CatalogProvider | None = None,
    settings: Settings | None = None,
) -> Flask:
    """Create and configure the Flask application instance.

    The catalog is loaded lazily on the first request unless ``provider``
    already holds one.
    """

    app = Flask(__name__)
    # Keep string ids in document order.
    app.json.sort_keys = False  # type: ignore[attr-defined]

    settings = settings or load_settings()
    provider = provider or CatalogProvider.from_file(settings.document)
    app.extensions[EXTENSION_KEY] = {"provider": provider, "settings": settings}

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Report service status together with catalog metadata."""

        catalog = current_provider().get()
        payload = {
            "status": "ok",
            "version": get_project_version(),
            "languages": list(catalog.available_languages),
            "base_language": catalog.base_language,
        }
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed requests."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(UnknownIdentifierError)
    def handle_unknown_identifier(error: UnknownIdentifierError):
        return problem_response(
            "unknown_identifier",
            status=404,
            message=str(error),
            id=error.string_id,
        ).to_response()

    @app.errorhandler(FileNotFoundError)
    @app.errorhandler(LocalizationError)
    def handle_catalog_error(error: LocalizationError | FileNotFoundError):
        """Surface catalog load failures without publishing a partial catalog."""

        logger.error("String catalog unavailable: %s", error)
        return problem_response(
            "catalog_unavailable", status=503, message=str(error)
        ).to_response()

    return app


__all__ = ["create_app"]
