"""
Flask application for AssetGen.
Exposes the generate endpoint plus health and service descriptor routes.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from assetgen import __version__
from assetgen.config import Settings, StoredConfig, load_stored_config
from assetgen.core import generate_asset_core
from assetgen.errors import AssetGenError
from assetgen.models import ErrorResponse
from assetgen.rate_limit import RATE_LIMITED_MESSAGE, create_limiter, rate_limit_value
from assetgen.validation import validate_generate_request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContext:
    settings: Settings
    stored_config: StoredConfig
    transport: Optional[httpx.AsyncBaseTransport] = None


def _context() -> AppContext:
    return current_app.extensions["assetgen"]


def _error(message: str, status_code: int, details: Optional[str] = None):
    body = ErrorResponse(message=message, details=details)
    return jsonify(body.model_dump()), status_code


def index():
    """Static service descriptor"""
    return jsonify({
        'name': 'AssetGen API',
        'description': 'API for generating visual assets from text descriptions',
        'version': __version__,
        'endpoints': {
            'generate': '/api/generate',
        },
    })


def health():
    return jsonify({'status': 'ok'})


def generate_asset():
    """Validate the request, generate the image and save it locally"""
    ctx = _context()
    data = request.get_json(silent=True)
    if data is None:
        # Form-encoded bodies are accepted too; their values are all strings.
        data = request.form.to_dict()
    generation_request = validate_generate_request(data, ctx.stored_config)

    result = asyncio.run(
        generate_asset_core(
            generation_request, ctx.stored_config, ctx.settings, ctx.transport
        )
    )
    return jsonify(result.model_dump())


def handle_asset_error(error: AssetGenError):
    if error.status_code >= 500:
        logger.error(f"Error generating asset ({error.kind}): {error.detail}")
    else:
        logger.info(f"Rejected generate request ({error.kind}): {error.detail}")
    return _error(error.message, error.status_code, error.detail)


def handle_rate_limited(error: HTTPException):
    return _error(RATE_LIMITED_MESSAGE, 429, str(error.description))


def handle_http_error(error: HTTPException):
    if error.code == 404:
        return _error('Endpoint not found', 404)
    return _error(error.name, error.code or 500, error.description)


def handle_unexpected_error(error: Exception):
    logger.exception(f"Unhandled error: {error}")
    return _error('An unexpected error occurred', 500)


def create_app(
    settings: Optional[Settings] = None,
    stored_config: Optional[StoredConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Flask:
    """Build the Flask app.

    Settings and the stored config are read once here and shared by every
    request the app serves.
    """
    settings = settings or Settings()
    if stored_config is None:
        stored_config = load_stored_config(settings.config_path)

    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes
    app.config['MAX_CONTENT_LENGTH'] = settings.max_content_length
    app.extensions['assetgen'] = AppContext(settings, stored_config, transport)

    limiter = create_limiter(app)

    app.add_url_rule('/', view_func=index, methods=['GET'])
    app.add_url_rule('/health', view_func=health, methods=['GET'])
    app.add_url_rule(
        '/api/generate',
        view_func=limiter.limit(rate_limit_value(settings))(generate_asset),
        methods=['POST'],
    )

    app.register_error_handler(AssetGenError, handle_asset_error)
    app.register_error_handler(429, handle_rate_limited)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_unexpected_error)
    return app
