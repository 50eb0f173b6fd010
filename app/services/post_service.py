import logging
from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy.orm.exc import StaleDataError

from app.db import db
from app.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.extensions.broadcaster import NEW_POST, get_broadcaster
from app.permissions import is_admin
from app.repositories import post_repository, user_repository
from app.schemas.post_schema import PostCreateSchema, PostFilterSchema, PostUpdateSchema
from app.schemas.validation import load_payload


logger = logging.getLogger(__name__)


def _isoformat(value):
    return value.isoformat() if value else None


def _build_user_map(posts):
    user_ids = set()
    for post in posts:
        user_ids.add(post.author_id)
        user_ids.update(comment.author_id for comment in post.comments)
        user_ids.update(reaction.user_id for reaction in post.reactions)

    return {user.id: user for user in user_repository.get_by_ids(user_ids)}


def _serialize_user_ref(user_id, user_by_id):
    user = user_by_id.get(user_id)
    return {
        "id": user_id,
        "username": user.username if user else f"user-{user_id}",
    }


def _serialize_author(user_id, user_by_id):
    payload = _serialize_user_ref(user_id, user_by_id)
    user = user_by_id.get(user_id)
    payload["profile_picture"] = user.profile_picture_id if user else None
    return payload


def serialize_comment(comment, user_by_id):
    return {
        "id": comment.id,
        "user": _serialize_user_ref(comment.author_id, user_by_id),
        "comment": comment.text,
        "photos": list(comment.photos or []),
        "pinned": bool(comment.pinned),
        "created_at": _isoformat(comment.created_at),
    }


def serialize_reaction(reaction, user_by_id):
    return {
        "id": reaction.id,
        "user": _serialize_user_ref(reaction.user_id, user_by_id),
        "type": reaction.type.value,
        "created_at": _isoformat(reaction.created_at),
    }


def _serialize_post(post, user_by_id):
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "author": _serialize_author(post.author_id, user_by_id),
        "pinned": bool(post.pinned),
        "photos": list(post.photos or []),
        "comments": [serialize_comment(c, user_by_id) for c in post.comments],
        "reactions": [serialize_reaction(r, user_by_id) for r in post.reactions],
        "created_at": _isoformat(post.created_at),
        "updated_at": _isoformat(post.updated_at),
    }


def serialize_posts(posts):
    user_by_id = _build_user_map(posts)
    return [_serialize_post(post, user_by_id) for post in posts]


def serialize_post(post):
    return serialize_posts([post])[0]


def get_post_or_404(post_id):
    post = post_repository.get_by_id(post_id)
    if post is None:
        raise NotFoundError("Post")
    return post


def _parse_datetime(raw, field):
    try:
        value = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError as e:
        raise ValidationError(f"{field} must be an ISO-8601 date") from e

    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _is_date_only(raw):
    try:
        date.fromisoformat(raw.strip())
    except ValueError:
        return False
    return True


def list_posts(filters=None):
    params = load_payload(PostFilterSchema(), filters or {})

    created_from = created_before = created_until = None

    start_raw = params.get("start_date")
    if start_raw:
        created_from = _parse_datetime(start_raw, "startDate")

    end_raw = params.get("end_date")
    if end_raw:
        if _is_date_only(end_raw):
            # a bare date covers that whole day
            end_day = date.fromisoformat(end_raw.strip())
            created_before = datetime.combine(end_day + timedelta(days=1), time.min)
        else:
            created_until = _parse_datetime(end_raw, "endDate")

    posts = post_repository.find_posts(
        author_id=params.get("user_id"),
        created_from=created_from,
        created_before=created_before,
        created_until=created_until,
    )
    return serialize_posts(posts)


def list_user_posts(user):
    return serialize_posts(post_repository.find_posts(author_id=user.id))


def create_post(author_id, data):
    fields = load_payload(PostCreateSchema(), data)

    post = post_repository.create_post(
        author_id=author_id,
        title=fields.get("title"),
        content=fields["content"].strip(),
        photos=fields.get("photos"),
    )
    payload = serialize_post(post)

    logger.info("Post %s created by user %s", post.id, author_id)
    get_broadcaster().broadcast(NEW_POST, payload)
    return payload


def _ensure_can_modify(post, user):
    if is_admin(user):
        return
    if post.author_id != user.id:
        raise ForbiddenError()


def update_post(post_id, user, data):
    post = get_post_or_404(post_id)
    _ensure_can_modify(post, user)

    changes = load_payload(PostUpdateSchema(), data)
    if "title" in changes:
        post.title = changes["title"]
    if "content" in changes:
        post.content = changes["content"].strip()
    if "photos" in changes:
        post.photos = list(changes["photos"])

    try:
        db.session.commit()
    except StaleDataError as e:
        db.session.rollback()
        logger.warning("Concurrent update detected on post %s", post_id)
        raise ConflictError() from e

    return serialize_post(post)


def delete_post(post_id, user):
    post = get_post_or_404(post_id)
    _ensure_can_modify(post, user)

    try:
        post_repository.delete_post(post)
    except StaleDataError as e:
        db.session.rollback()
        raise ConflictError() from e

    logger.info("Post %s deleted by user %s", post_id, user.id)


def set_pinned(post_id, pinned: bool, user):
    if not is_admin(user):
        raise ForbiddenError("Only admins can pin posts")

    if not post_repository.set_pinned(post_id, pinned):
        raise NotFoundError("Post")
