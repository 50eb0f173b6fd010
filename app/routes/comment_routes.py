from flask import Blueprint, jsonify
from flask_jwt_extended import get_current_user, jwt_required

from app.permissions import Capability, capability_required
from app.routes.utils import handle_service_errors, json_body
from app.services import comment_service


comment_bp = Blueprint("comments", __name__)

@comment_bp.route("/posts/<int:post_id>/comments", methods=["POST"])
@jwt_required()
@capability_required(Capability.CREATE)
@handle_service_errors
def create_comment(post_id):
    post = comment_service.add_comment(post_id, get_current_user(), json_body())
    return jsonify(post), 201


@comment_bp.route("/posts/<int:post_id>/comments/<int:comment_id>", methods=["PUT"])
@jwt_required()
@capability_required(Capability.UPDATE)
@handle_service_errors
def update_comment(post_id, comment_id):
    post = comment_service.update_comment(
        post_id, comment_id, get_current_user(), json_body()
    )
    return jsonify(post), 200


@comment_bp.route("/posts/<int:post_id>/comments/<int:comment_id>", methods=["DELETE"])
@jwt_required()
@capability_required(Capability.DELETE)
@handle_service_errors
def delete_comment(post_id, comment_id):
    comment_service.delete_comment(post_id, comment_id, get_current_user())
    return jsonify({"message": "Comment deleted successfully."}), 200


@comment_bp.route("/posts/<int:post_id>/comments/<int:comment_id>/pin", methods=["POST"])
@jwt_required()
@handle_service_errors
def pin_comment(post_id, comment_id):
    comment_service.set_comment_pinned(post_id, comment_id, True, get_current_user())
    return jsonify({"message": "Comment pinned successfully."}), 200


@comment_bp.route("/posts/<int:post_id>/comments/<int:comment_id>/unpin", methods=["POST"])
@jwt_required()
@handle_service_errors
def unpin_comment(post_id, comment_id):
    comment_service.set_comment_pinned(post_id, comment_id, False, get_current_user())
    return jsonify({"message": "Comment unpinned successfully."}), 200
