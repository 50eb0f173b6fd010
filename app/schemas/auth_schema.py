from marshmallow import EXCLUDE, validate

from app.extensions.extensions import ma
from app.permissions import Role
from app.schemas.validation import not_blank


SOCIAL_LINK_FIELDS = ("twitter", "linkedin", "facebook", "instagram")
PROFILE_FIELDS = (
    "bio",
    "profile_picture_id",
    "address",
    "phone",
    "website",
    "organization",
    "department",
)


def _required(message):
    return {"required": message, "null": message}


class SignupSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    username = ma.String(
        required=True,
        validate=not_blank("Username is required"),
        error_messages=_required("Username is required"),
    )
    email = ma.Email(
        required=True,
        error_messages={**_required("Email is required"), "invalid": "Email is invalid"},
    )
    password = ma.String(
        required=True,
        validate=validate.Length(min=1, error="Password is required"),
        error_messages=_required("Password is required"),
    )
    role = ma.Enum(
        Role,
        by_value=True,
        load_default=Role.USER,
        error_messages={"unknown": "Role must be one of: user, admin"},
    )


class SocialLinksSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    twitter = ma.String(allow_none=True)
    linkedin = ma.String(allow_none=True)
    facebook = ma.String(allow_none=True)
    instagram = ma.String(allow_none=True)


class ProfileUpdateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    email = ma.Email(error_messages={"invalid": "Email is invalid", "null": "Email is required"})
    password = ma.String(
        validate=validate.Length(min=1, error="Password is required"),
        error_messages={"null": "Password is required"},
    )
    bio = ma.String(allow_none=True)
    profile_picture_id = ma.Integer(
        data_key="profilePicture", allow_none=True, strict=True
    )
    address = ma.String(allow_none=True)
    phone = ma.String(allow_none=True)
    website = ma.String(allow_none=True)
    organization = ma.String(allow_none=True)
    department = ma.String(allow_none=True)
    social_links = ma.Nested(SocialLinksSchema, data_key="socialLinks")


class UserResponseSchema(ma.Schema):
    id = ma.Integer()
    username = ma.String()
    email = ma.String()
    role = ma.Enum(Role, by_value=True)
    signed_up_at = ma.DateTime(attribute="created_at")


class ProfileResponseSchema(UserResponseSchema):
    bio = ma.String()
    profile_picture = ma.Integer(attribute="profile_picture_id")
    address = ma.String()
    phone = ma.String()
    website = ma.String()
    organization = ma.String()
    department = ma.String()
    social_links = ma.Function(
        lambda user: {name: getattr(user, name) for name in SOCIAL_LINK_FIELDS}
    )
