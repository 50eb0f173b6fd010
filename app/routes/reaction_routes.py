from flask import Blueprint, jsonify
from flask_jwt_extended import get_current_user, jwt_required

from app.permissions import Capability, capability_required
from app.routes.utils import handle_service_errors, json_body
from app.services import reaction_service

reaction_bp = Blueprint("reactions", __name__)

@reaction_bp.route("/posts/<int:post_id>/react", methods=["POST"])
@jwt_required()
@capability_required(Capability.CREATE)
@handle_service_errors
def react(post_id):
    post = reaction_service.react(post_id, get_current_user(), json_body())
    return jsonify(post), 200


@reaction_bp.route("/posts/<int:post_id>/react", methods=["DELETE"])
@jwt_required()
@capability_required(Capability.DELETE)
@handle_service_errors
def remove_reaction(post_id):
    reaction_service.remove_reaction(post_id, get_current_user())
    return jsonify({"message": "Reaction removed successfully."}), 200
