from flask import Blueprint, request, jsonify
from flask_jwt_extended import get_current_user, jwt_required

from app.permissions import Capability, capability_required
from app.routes.utils import handle_service_errors, json_body
from app.services import post_service

post_bp = Blueprint("posts", __name__)


@post_bp.route("/posts", methods=["GET"])
@jwt_required()
@capability_required(Capability.READ)
@handle_service_errors
def list_posts():
    posts = post_service.list_posts(request.args.to_dict())
    return jsonify(posts), 200


@post_bp.route("/posts/user", methods=["GET"])
@jwt_required()
@capability_required(Capability.READ)
@handle_service_errors
def list_my_posts():
    posts = post_service.list_user_posts(get_current_user())
    return jsonify(posts), 200


@post_bp.route("/posts", methods=["POST"])
@jwt_required()
@capability_required(Capability.CREATE)
@handle_service_errors
def create_post():
    post = post_service.create_post(get_current_user().id, json_body())
    return jsonify(post), 201


@post_bp.route("/posts/<int:post_id>", methods=["PUT"])
@jwt_required()
@capability_required(Capability.UPDATE)
@handle_service_errors
def update_post(post_id):
    post = post_service.update_post(post_id, get_current_user(), json_body())
    return jsonify(post), 200


@post_bp.route("/posts/<int:post_id>", methods=["DELETE"])
@jwt_required()
@capability_required(Capability.DELETE)
@handle_service_errors
def delete_post(post_id):
    post_service.delete_post(post_id, get_current_user())
    return jsonify({"message": "Post deleted successfully."}), 200


@post_bp.route("/posts/<int:post_id>/pin", methods=["POST"])
@jwt_required()
@handle_service_errors
def pin_post(post_id):
    post_service.set_pinned(post_id, True, get_current_user())
    return jsonify({"message": "Post pinned successfully."}), 200


@post_bp.route("/posts/<int:post_id>/unpin", methods=["POST"])
@jwt_required()
@handle_service_errors
def unpin_post(post_id):
    post_service.set_pinned(post_id, False, get_current_user())
    return jsonify({"message": "Post unpinned successfully."}), 200
