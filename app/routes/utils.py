import logging
from functools import wraps

from flask import jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from app.db import db
from app.exceptions import ServiceError


logger = logging.getLogger(__name__)


def json_body():
    data = request.get_json(silent=True)
    if data is None and not request.get_data():
        return {}
    return data


def handle_service_errors(view_func):
    """Turn service errors into JSON responses; store failures become a bare 500."""

    @wraps(view_func)
    def wrapped(*args, **kwargs):
        try:
            return view_func(*args, **kwargs)
        except ServiceError as e:
            return jsonify({"error": e.message}), e.status_code
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Database error in %s %s", request.method, request.path)
            return jsonify({"error": "Internal server error"}), 500

    return wrapped
