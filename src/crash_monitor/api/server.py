# crash_monitor/api/server.py
"""HTTP boundary for the indicator fetch service."""

from __future__ import annotations

import logging
import sys
from typing import Callable, Optional

from flask import Flask, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from crash_monitor.config import ConfigurationError, Settings, configure_logging, load_settings
from crash_monitor.domain.indicators import IndicatorCatalogue, default_catalogue
from crash_monitor.domain.schemas import FetchRequest
from crash_monitor.fetch.errors import FetchError, InvalidIndicatorError
from crash_monitor.fetch.service import IndicatorFetchService

logger = logging.getLogger(__name__)

FETCH_ROUTE = "/api/fetch-indicator"


def create_app(
    service: Optional[IndicatorFetchService] = None,
    settings: Optional[Settings] = None,
    catalogue: Optional[IndicatorCatalogue] = None,
    service_factory: Optional[Callable[[], IndicatorFetchService]] = None,
) -> Flask:
    """
    Flask app factory.

    The fetch service is built lazily on the first fetch so the catalogue and
    health routes stay available when no API key is configured.
    """
    app = Flask(__name__)
    catalogue = catalogue or default_catalogue()
    prompts = catalogue.prompts()
    state = {"service": service}

    def _service() -> IndicatorFetchService:
        if state["service"] is None:
            if service_factory is not None:
                state["service"] = service_factory()
            else:
                state["service"] = IndicatorFetchService.from_settings(settings or load_settings(), catalogue)
        return state["service"]

    @app.route(FETCH_ROUTE, methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    def fetch_indicator():
        if request.method != "POST":
            return jsonify({"error": "Method not allowed"}), 405

        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            body = {}
        try:
            indicator_id = FetchRequest.model_validate(body).indicator_id
        except ValidationError:
            indicator_id = None

        if indicator_id not in prompts:
            return jsonify({"error": str(InvalidIndicatorError(indicator_id))}), InvalidIndicatorError.status_code

        try:
            svc = _service()
            result = svc.fetch(indicator_id)
        except FetchError as e:
            return jsonify({"error": str(e)}), e.status_code
        except ConfigurationError as e:
            logger.error(f"fetch-indicator configuration error: {e}")
            return jsonify({"error": str(e)}), 500
        except Exception as e:
            logger.exception("fetch-indicator unexpected error")
            return jsonify({"error": str(e)}), 500

        return jsonify(result), 200

    @app.route("/api/indicators")
    def list_indicators():
        return jsonify(
            [
                {
                    "id": i.indicator_id,
                    "label": i.label,
                    "sublabel": i.sublabel,
                    "unit": i.unit,
                    "warn": i.warn,
                    "danger": i.danger,
                    "autoFetch": i.auto_fetch,
                    "source": i.source,
                    "sourceUrl": i.source_url,
                    "description": i.description,
                }
                for i in catalogue
            ]
        )

    @app.route("/healthz")
    def health_check():
        return jsonify({"status": "ok", "catalogue_version": catalogue.version})

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description or e.name}), e.code

    return app


def main() -> int:
    settings = load_settings()
    configure_logging(settings.log_level)

    if not settings.api_key:
        logger.warning("ANTHROPIC_API_KEY not found. Indicator fetches will fail until it is set.")

    app = create_app(settings=settings)
    logger.info(f"Serving indicator fetch API on http://{settings.host}:{settings.port}")
    try:
        app.run(host=settings.host, port=settings.port)
    except OSError as e:
        sys.stderr.write(f"Could not start server: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
