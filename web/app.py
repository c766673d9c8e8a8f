"""Flask app factory for the converter API.

Every response is JSON, errors included, so API clients never have to parse
Flask's default HTML error pages.
"""

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


def _json_error(error: HTTPException):
    return jsonify({"error": error.description}), error.code


def _internal_error(error: Exception):
    logger.exception("Unhandled error while converting", exc_info=error)
    return jsonify({"error": "Internal server error"}), 500


def create_app():
    app = Flask(__name__)
    # Styled-text output is mostly non-ASCII glyphs; keep it readable.
    app.json.ensure_ascii = False

    from web.routes import bp
    app.register_blueprint(bp)

    app.register_error_handler(HTTPException, _json_error)
    app.register_error_handler(Exception, _internal_error)

    return app
