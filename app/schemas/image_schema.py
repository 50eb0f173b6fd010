from marshmallow import EXCLUDE, validate

from app.extensions.extensions import ma


class ImageUploadSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    filename = ma.String(validate=validate.Length(max=255))
    type = ma.String(allow_none=True, validate=validate.Length(max=50))
    related_id = ma.String(
        data_key="relatedId", allow_none=True, validate=validate.Length(max=64)
    )


class ImageResponseSchema(ma.Schema):
    id = ma.Integer()
    filename = ma.String()
    content_type = ma.String()
    type = ma.String()
    related_id = ma.String()
    size = ma.Function(lambda image: len(image.data or b""))
    created_at = ma.DateTime()
    url = ma.URLFor("images.get_image", values=dict(image_id="<id>"))
