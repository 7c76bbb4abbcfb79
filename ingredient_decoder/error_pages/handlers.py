# /ingredient_decoder/error_pages/handlers.py

# Third-party imports
from flask import Blueprint, jsonify, request


# Local imports
from ingredient_decoder import app, log_message

# blueprint router configuration
error_pages = Blueprint("error_pages", __name__)


def _description(error, fallback):
    return getattr(error, "description", None) or fallback


@error_pages.app_errorhandler(400)
def error_400(error):
    """Error 400 handler"""
    message = _description(error, "Bad request")
    app.logger.warning(log_message(f"400 Error: {message}, URL: {request.path}"))
    return jsonify({"error": message}), 400


@error_pages.app_errorhandler(404)
def error_404(error):
    """Error 404 handler"""
    incoming_url = request.path
    app.logger.error(log_message(f"404 Error: {error}, URL: {incoming_url}"))
    return jsonify({"error": _description(error, "Not found")}), 404


@error_pages.app_errorhandler(405)
def error_405(error):
    """Error 405 handler"""
    app.logger.error(log_message(f"405 Error: {request.method} {request.path}"))
    return jsonify({"error": "Method not allowed"}), 405


@error_pages.app_errorhandler(500)
def error_500(error):
    """Error 500 handler"""
    app.logger.error(log_message(error))
    return jsonify({"error": "Internal server error"}), 500
