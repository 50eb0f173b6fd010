from functools import wraps

from flask import Blueprint, g, jsonify, request
from flask_jwt_extended import current_user, get_current_user, jwt_required

from app.exceptions import InvalidCredentialsError
from app.permissions import Role, role_required
from app.routes.utils import handle_service_errors, json_body
from app.schemas.auth_schema import ProfileResponseSchema, UserResponseSchema
from app.services import auth_service


auth_bp = Blueprint("auth", __name__)


def _basic_credentials():
    auth = request.authorization
    if auth is not None and auth.type == "basic":
        return auth.username, auth.password

    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data.get("usernameOrEmail") or data.get("username"), data.get("password")

    return None, None


def basic_auth_required(view_func):
    @wraps(view_func)
    def wrapped(*args, **kwargs):
        username_or_email, password = _basic_credentials()
        if not username_or_email:
            return jsonify({"error": "No authorization header"}), 403

        try:
            g.user = auth_service.authenticate_basic(username_or_email, password)
        except InvalidCredentialsError as e:
            return jsonify({"error": e.message}), 403
        return view_func(*args, **kwargs)

    return wrapped


def _auth_payload(user):
    return {
        "user": UserResponseSchema().dump(user),
        "token": auth_service.issue_token(user),
    }


@auth_bp.route("/signup", methods=["POST"])
@handle_service_errors
def signup():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    user = auth_service.register(
        data.get("username"),
        data.get("email"),
        data.get("password"),
        data.get("role"),
    )
    return jsonify(_auth_payload(user)), 201


@auth_bp.route("/signin", methods=["POST"])
@basic_auth_required
def signin():
    return jsonify(_auth_payload(g.user)), 200


@auth_bp.route("/users", methods=["GET"])
@jwt_required()
@role_required(Role.ADMIN)
@handle_service_errors
def list_users():
    users = auth_service.list_users()
    return jsonify(UserResponseSchema(many=True).dump(users)), 200


@auth_bp.route("/users/me", methods=["GET"])
@jwt_required()
def get_me():
    return jsonify(ProfileResponseSchema().dump(current_user)), 200


@auth_bp.route("/users/me", methods=["PUT"])
@jwt_required()
@handle_service_errors
def update_me():
    user = auth_service.update_profile(get_current_user(), json_body())
    return jsonify(ProfileResponseSchema().dump(user)), 200


@auth_bp.route("/secret", methods=["GET"])
@jwt_required()
def secret():
    return "Welcome to the secret area", 200
