from flask import jsonify

from app.exceptions import InvalidTokenError, ServiceError
from app.extensions.extensions import jwt
from app.services import auth_service


_registered = False


def _auth_error(message=InvalidTokenError.default_message):
    return jsonify({"error": message}), 401


def register_jwt_callbacks():
    global _registered
    if _registered:
        return

    @jwt.user_lookup_loader
    def load_user(_jwt_header, jwt_data):
        try:
            return auth_service.load_user_from_claims(jwt_data)
        except ServiceError:
            return None

    @jwt.user_lookup_error_loader
    def user_lookup_error(_jwt_header, _jwt_data):
        return _auth_error()

    @jwt.unauthorized_loader
    def missing_token(_reason):
        return _auth_error()

    @jwt.invalid_token_loader
    def invalid_token(_reason):
        return _auth_error()

    @jwt.expired_token_loader
    def expired_token(_jwt_header, _jwt_data):
        return _auth_error()

    @jwt.revoked_token_loader
    def revoked_token(_jwt_header, _jwt_data):
        return _auth_error()

    _registered = True
