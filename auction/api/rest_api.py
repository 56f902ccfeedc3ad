"""
REST API for the discrete auction.

This module provides HTTP endpoints for running an auction over a
batch of orders and for engine statistics.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from flask import Flask, request, jsonify
from flask_cors import CORS

from ..config.settings import get_settings
from ..core.discrete_auction import DiscreteAuction
from ..core.order import Order
from ..utils.logger import AuctionLogger
from .parser import LINE_WHITESPACE, parse_order_line
from .validators import validate_auction_request, validate_order_data

logger = logging.getLogger(__name__)
auction_logger = AuctionLogger()

API_VERSION = '1.0.0'


def create_app(engine: Optional[DiscreteAuction] = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        engine: Auction engine to serve, a new one by default

    Returns:
        Configured Flask application
    """
    settings = get_settings()
    app = Flask(__name__)
    if settings.enable_cors:
        CORS(app, origins=settings.cors_origins)

    app.config['AUCTION_ENGINE'] = engine or DiscreteAuction(settings)

    register_routes(app)

    logger.info("REST API initialized")
    return app


def _orders_from_text(body: str) -> Tuple[List[Order], int]:
    settings = get_settings()
    orders = []
    rejected = 0
    for line in body.splitlines()[:settings.max_order_count]:
        if not line.strip(LINE_WHITESPACE):
            continue
        order = parse_order_line(line, settings)
        if order is None:
            rejected += 1
        else:
            orders.append(order)
    return orders, rejected


def _orders_from_json(raw_orders: list) -> Tuple[List[Order], int]:
    settings = get_settings()
    orders = []
    rejected = 0
    for raw_order in raw_orders[:settings.max_order_count]:
        is_valid, error, order = validate_order_data(raw_order, settings)
        if is_valid:
            orders.append(order)
        else:
            rejected += 1
            auction_logger.log_rejected_input(repr(raw_order), error)
    return orders, rejected


def register_routes(app: Flask) -> None:
    """Register all API routes."""

    @app.route('/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'version': API_VERSION
        })

    @app.route('/auction', methods=['POST'])
    def run_auction():
        """
        Run an auction over a batch of orders.

        JSON request body:
        {
            "orders": [
                {"side": "S", "quantity": 10, "price": "15.00"},
                {"side": "B", "quantity": 10, "price": "20.00"}
            ]
        }

        A text/plain body with one "<S|B> <quantity> <price>" order per
        line is accepted as well. Invalid orders are skipped and counted.
        """
        engine: DiscreteAuction = app.config['AUCTION_ENGINE']

        if request.mimetype == 'text/plain':
            orders, rejected = _orders_from_text(request.get_data(as_text=True))
        else:
            data = request.get_json(silent=True)
            if data is None:
                return jsonify({'error': 'Request body must be JSON or text/plain'}), 400

            is_valid, error, raw_orders = validate_auction_request(data)
            if not is_valid:
                return jsonify({'error': error}), 400

            orders, rejected = _orders_from_json(raw_orders)

        try:
            result = engine.clear_orders(orders)
        except Exception as e:
            logger.error(f"Error running auction: {str(e)}")
            return jsonify({'error': 'Internal server error'}), 500

        response_data = result.to_dict()
        response_data['accepted_orders'] = len(orders)
        response_data['rejected_orders'] = rejected

        logger.info(f"Auction run: {result} ({len(orders)} orders, {rejected} rejected)")
        return jsonify(response_data), 200

    @app.route('/statistics', methods=['GET'])
    def get_statistics():
        """Get engine statistics."""
        engine: DiscreteAuction = app.config['AUCTION_ENGINE']
        stats = engine.get_statistics()
        stats['performance'] = engine.monitor.get_summary()
        return jsonify(stats), 200

    @app.errorhandler(400)
    def bad_request(error):
        """Handle 400 errors."""
        return jsonify({'error': 'Bad request'}), 400

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({'error': 'Endpoint not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        """Handle 405 errors."""
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        logger.error(f"Internal server error: {str(error)}")
        return jsonify({'error': 'Internal server error'}), 500


def run_server(host: Optional[str] = None, port: Optional[int] = None, debug: Optional[bool] = None) -> None:
    """
    Run the REST API server.

    Args:
        host: Host to bind to, from settings by default
        port: Port to bind to, from settings by default
        debug: Enable debug mode, from settings by default
    """
    settings = get_settings()
    host = host or settings.rest_host
    port = port or settings.rest_port
    debug = settings.debug if debug is None else debug

    app = create_app()
    logger.info(f"Starting REST API server on {host}:{port}")
    app.run(host=host, port=port, debug=debug, use_reloader=False)
