import io

from flask import Blueprint, current_app, jsonify, request, send_file

from app.routes.utils import handle_service_errors
from app.schemas.image_schema import ImageResponseSchema
from app.services import image_service


image_bp = Blueprint("images", __name__)


@image_bp.route("/upload", methods=["POST"])
@handle_service_errors
def upload_image():
    image = image_service.ingest_upload(
        request.files.get("image"),
        tag=request.form.get("type"),
        related_id=request.form.get("relatedId"),
    )
    return jsonify({
        "message": "Image uploaded successfully!",
        "image": ImageResponseSchema().dump(image),
    }), 201


@image_bp.route("/images", methods=["GET"])
@handle_service_errors
def list_images():
    images = image_service.list_images(
        image_type=request.args.get("type"),
        related_id=request.args.get("relatedId"),
    )
    return jsonify(ImageResponseSchema(many=True).dump(images)), 200


@image_bp.route("/<int:image_id>", methods=["GET"])
@handle_service_errors
def get_image(image_id):
    image = image_service.get_image(image_id)
    # Stored images are never modified, so the id is a stable validator.
    return send_file(
        io.BytesIO(image.data),
        mimetype=image.content_type,
        download_name=image.filename,
        etag=f"image-{image.id}",
        conditional=True,
        max_age=current_app.config.get("MEDIA_CACHE_MAX_AGE_SECONDS", 0),
    )
