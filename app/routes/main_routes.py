import logging

from flask import Blueprint, jsonify, request
from werkzeug.exceptions import HTTPException

from app.db import db

main_bp = Blueprint("main", __name__)

logger = logging.getLogger(__name__)


@main_bp.route("/", methods=["GET"])
def home():
    return "Welcome to the Home Page", 200


@main_bp.route("/health", methods=["GET"])
def health():
    return "OK", 200


@main_bp.app_errorhandler(404)
def not_found(_error):
    return jsonify({"error": "Not Found", "path": request.path}), 404


@main_bp.app_errorhandler(405)
def method_not_allowed(_error):
    return jsonify({"error": "Method Not Allowed", "path": request.path}), 405


@main_bp.app_errorhandler(413)
def payload_too_large(_error):
    return jsonify({"error": "Payload Too Large"}), 413


@main_bp.app_errorhandler(Exception)
def internal_error(error):
    if isinstance(error, HTTPException):
        return jsonify({"error": error.name}), error.code

    db.session.rollback()
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({"error": "Internal server error"}), 500
