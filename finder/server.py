"""Flask HTTP surface for the resolver."""

import logging
from typing import Optional

from flask import Flask, jsonify, request

from .config import FinderConfig, load_config
from .errors import (
    FinderError,
    InvalidRequestError,
    ProviderConfigError,
    TitleNotFoundError,
    UpstreamUnavailableError,
)
from .resolver import MODES, MODE_SEARCH, Resolver

logger = logging.getLogger(__name__)


def create_app(config: Optional[FinderConfig] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        config: Provider configuration (default: load_config())

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)
    app.config['FINDER'] = config if config is not None else load_config()

    def make_resolver() -> Resolver:
        return Resolver(app.config['FINDER'])

    app.config['RESOLVER_FACTORY'] = make_resolver

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok', 'provider': app.config['FINDER'].provider})

    @app.route('/api/search', methods=['GET'])
    def search():
        title = request.args.get('title')
        mode = request.args.get('mode') or None

        if mode is not None and mode not in MODES:
            return jsonify({'error': 'Invalid mode parameter'}), 400

        resolver = app.config['RESOLVER_FACTORY']()
        if mode == MODE_SEARCH:
            suggestions = resolver.suggest(title)
            return jsonify({'suggestions': [s.to_dict() for s in suggestions]})

        record = resolver.lookup(title)
        return jsonify(record.to_dict())

    @app.errorhandler(InvalidRequestError)
    def handle_invalid(e):
        return jsonify({'error': str(e)}), e.status_code

    @app.errorhandler(TitleNotFoundError)
    def handle_not_found(e):
        body = {'error': str(e)}
        if e.suggestions:
            body['suggestions'] = [s.to_dict() for s in e.suggestions]
        return jsonify(body), e.status_code

    @app.errorhandler(ProviderConfigError)
    def handle_misconfigured(e):
        logger.error("Provider misconfigured: %s", e)
        return jsonify({'error': f"Server configuration error: {e}"}), e.status_code

    @app.errorhandler(UpstreamUnavailableError)
    def handle_upstream(e):
        logger.error("Upstream failure: %s", e)
        return jsonify({'error': e.public_message}), e.status_code

    @app.errorhandler(FinderError)
    def handle_other(e):
        logger.error("Request failed: %s", e)
        return jsonify({'error': str(e)}), e.status_code

    return app
