import io
import logging

from flask import current_app
from PIL import Image as PILImage
from PIL import UnidentifiedImageError
from sqlalchemy.exc import SQLAlchemyError

from app.db import db
from app.exceptions import NotFoundError, UnsupportedFormatError, UploadError, ValidationError
from app.repositories import image_repository
from app.schemas.image_schema import ImageUploadSchema
from app.schemas.validation import load_payload


logger = logging.getLogger(__name__)

OUTPUT_FORMAT = "JPEG"
OUTPUT_MIME_TYPE = "image/jpeg"


def transcode_image(raw_bytes: bytes, max_width: int, quality: int) -> bytes:
    try:
        with PILImage.open(io.BytesIO(raw_bytes)) as source:
            source.load()
            image = source.convert("RGB")
    except (UnidentifiedImageError, PILImage.DecompressionBombError, OSError, ValueError) as e:
        logger.warning("Rejected upload: %s", e)
        raise UnsupportedFormatError() from e

    if image.width > max_width:
        height = max(1, round(image.height * max_width / image.width))
        image = image.resize((max_width, height), PILImage.Resampling.LANCZOS)

    output = io.BytesIO()
    image.save(output, format=OUTPUT_FORMAT, quality=quality)
    return output.getvalue()


def _optional_text(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _load_metadata(filename, tag, related_id):
    try:
        return load_payload(ImageUploadSchema(), {
            "filename": filename or "upload",
            "type": _optional_text(tag),
            "relatedId": _optional_text(related_id),
        })
    except ValidationError as e:
        logger.warning("Rejected upload metadata: %s", e.message)
        raise UploadError() from e


def ingest(raw_bytes, filename, mime_type, tag=None, related_id=None):
    if not raw_bytes:
        logger.warning("Rejected upload: empty file")
        raise UploadError()

    metadata = _load_metadata(filename, tag, related_id)

    data = transcode_image(
        raw_bytes,
        max_width=current_app.config["IMAGE_MAX_WIDTH"],
        quality=current_app.config["IMAGE_JPEG_QUALITY"],
    )

    try:
        image = image_repository.add_image(
            filename=metadata["filename"],
            content_type=OUTPUT_MIME_TYPE,
            data=data,
            image_type=metadata.get("type"),
            related_id=metadata.get("related_id"),
        )
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Failed to store image %s", metadata["filename"])
        raise UploadError() from e

    logger.info(
        "Stored image %s (%s, %d -> %d bytes, uploaded as %s)",
        image.id, image.filename, len(raw_bytes), len(data), mime_type,
    )
    return image


def ingest_upload(file_storage, tag=None, related_id=None):
    if file_storage is None or not getattr(file_storage, "filename", ""):
        logger.warning("Rejected upload: no image file in request")
        raise UploadError()

    return ingest(
        file_storage.read(),
        filename=file_storage.filename,
        mime_type=getattr(file_storage, "mimetype", None),
        tag=tag,
        related_id=related_id,
    )


def list_images(image_type=None, related_id=None):
    return image_repository.find_images(
        image_type=_optional_text(image_type),
        related_id=_optional_text(related_id),
    )


def get_image(image_id):
    image = image_repository.get_by_id(image_id)
    if image is None:
        raise NotFoundError("Image")
    return image
