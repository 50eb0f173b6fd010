from marshmallow import EXCLUDE

from app.extensions.extensions import ma
from app.models.reaction_model import ReactionType
from app.schemas.validation import not_blank


class PostCreateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    title = ma.String(allow_none=True)
    content = ma.String(
        required=True,
        validate=not_blank("Content is required"),
        error_messages={"required": "Content is required", "null": "Content is required"},
    )
    photos = ma.List(ma.Integer(strict=True), load_default=list)


class PostUpdateSchema(ma.Schema):
    """Fields an author (or admin) may change. Author and pin state are not among them."""

    class Meta:
        unknown = EXCLUDE

    title = ma.String(allow_none=True)
    content = ma.String(
        validate=not_blank("Content is required"),
        error_messages={"null": "Content is required"},
    )
    photos = ma.List(ma.Integer(strict=True))


class PostFilterSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = ma.Integer(data_key="userId", error_messages={"invalid": "userId must be an integer"})
    start_date = ma.String(data_key="startDate")
    end_date = ma.String(data_key="endDate")


class ReactionSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    reaction = ma.Enum(
        ReactionType,
        by_value=True,
        required=True,
        error_messages={
            "required": "Reaction is required",
            "null": "Reaction is required",
            "unknown": "Reaction must be one of: like, funny, sad, angry",
        },
    )
