from marshmallow import EXCLUDE

from app.extensions.extensions import ma
from app.schemas.validation import not_blank


class CommentCreateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    comment = ma.String(
        required=True,
        validate=not_blank("Comment is required"),
        error_messages={"required": "Comment is required", "null": "Comment is required"},
    )
    photos = ma.List(ma.Integer(strict=True), load_default=list)


class CommentUpdateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    comment = ma.String(
        validate=not_blank("Comment is required"),
        error_messages={"null": "Comment is required"},
    )
    photos = ma.List(ma.Integer(strict=True))
