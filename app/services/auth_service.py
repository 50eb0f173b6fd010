import logging

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError
from sqlalchemy.exc import IntegrityError

from app.db import db
from app.exceptions import (
    DuplicateKeyError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserNotFoundError,
)
from app.extensions.broadcaster import USER_PROFILE_IMAGE, get_broadcaster
from app.permissions import Role
from app.repositories import user_repository
from app.schemas.auth_schema import (
    PROFILE_FIELDS,
    SOCIAL_LINK_FIELDS,
    ProfileUpdateSchema,
    SignupSchema,
)
from app.schemas.validation import load_payload


logger = logging.getLogger(__name__)


def _require_non_empty_string(value):
    return isinstance(value, str) and value.strip()


def issue_token(user) -> str:
    return create_access_token(
        identity=str(user.id),
        additional_claims={
            "id": user.id,
            "username": user.username,
            "role": Role(user.role).value,
        },
    )


def register(username, email, password, role=None):
    payload = {"username": username, "email": email, "password": password}
    if role is not None:
        payload["role"] = role
    data = load_payload(SignupSchema(), payload)

    username = data["username"].strip()
    email = data["email"].strip().lower()

    if user_repository.exists_with_username_or_email(username, email):
        raise DuplicateKeyError()

    try:
        user = user_repository.create_user(
            username=username,
            email=email,
            password=data["password"],
            role=data["role"],
        )
    except IntegrityError as e:
        # lost a race against a concurrent signup
        db.session.rollback()
        raise DuplicateKeyError() from e

    logger.info("Registered user %s (%s)", user.username, user.role.value)
    return user


def authenticate_basic(username_or_email, password):
    if not _require_non_empty_string(username_or_email) or not isinstance(password, str):
        raise InvalidCredentialsError()

    value = username_or_email.strip()
    user = user_repository.get_by_username_or_email(value)
    if user is None and "@" in value:
        user = user_repository.get_by_email(value.lower())

    if not user or not user.check_password(password):
        raise InvalidCredentialsError()

    return user


def authenticate_token(token):
    if not _require_non_empty_string(token):
        raise InvalidTokenError()

    try:
        claims = decode_token(token)
    except (PyJWTError, JWTExtendedException) as e:
        raise InvalidTokenError() from e

    return load_user_from_claims(claims)


def load_user_from_claims(claims):
    try:
        user_id = int(claims.get("sub"))
    except (TypeError, ValueError) as e:
        raise InvalidTokenError() from e

    user = user_repository.get_by_id(user_id)
    if user is None:
        raise UserNotFoundError()
    return user


def list_users():
    return user_repository.list_users()


def update_profile(user, data):
    changes = load_payload(ProfileUpdateSchema(), data)
    previous_picture = user.profile_picture_id

    if "email" in changes:
        email = changes["email"].strip().lower()
        existing = user_repository.get_by_email(email)
        if existing is not None and existing.id != user.id:
            raise DuplicateKeyError("Email already exists")
        user.email = email

    # Only a supplied password is re-hashed; other edits keep the stored hash.
    if "password" in changes:
        user.set_password(changes["password"])

    for field in PROFILE_FIELDS:
        if field in changes:
            setattr(user, field, changes[field])

    for field, value in (changes.get("social_links") or {}).items():
        if field in SOCIAL_LINK_FIELDS:
            setattr(user, field, value)

    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise DuplicateKeyError("Email already exists") from e

    if user.profile_picture_id is not None and user.profile_picture_id != previous_picture:
        get_broadcaster().broadcast(
            USER_PROFILE_IMAGE,
            {"user_id": user.id, "image_id": user.profile_picture_id},
        )

    return user
