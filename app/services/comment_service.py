import logging

from app.exceptions import ForbiddenError, NotFoundError
from app.extensions.broadcaster import NEW_COMMENT, get_broadcaster
from app.permissions import is_admin
from app.repositories import comment_repository
from app.schemas.comment_schema import CommentCreateSchema, CommentUpdateSchema
from app.schemas.validation import load_payload
from app.services.post_service import get_post_or_404, serialize_comment, serialize_post


logger = logging.getLogger(__name__)


def _get_comment_or_404(post_id, comment_id):
    get_post_or_404(post_id)
    comment = comment_repository.get_comment(post_id, comment_id)
    if comment is None:
        raise NotFoundError("Comment")
    return comment


def _ensure_can_modify(comment, user):
    if is_admin(user):
        return
    if comment.author_id != user.id:
        raise ForbiddenError()


def add_comment(post_id, user, data):
    fields = load_payload(CommentCreateSchema(), data)
    post = get_post_or_404(post_id)

    comment = comment_repository.create_comment(
        author_id=user.id,
        post_id=post.id,
        text=fields["comment"],
        photos=fields.get("photos"),
    )

    comment_payload = serialize_comment(comment, {user.id: user})
    get_broadcaster().broadcast(
        NEW_COMMENT,
        {"post_id": post_id, "comment": comment_payload},
    )

    return serialize_post(get_post_or_404(post_id))


def update_comment(post_id, comment_id, user, data):
    comment = _get_comment_or_404(post_id, comment_id)
    _ensure_can_modify(comment, user)

    changes = load_payload(CommentUpdateSchema(), data)
    values = {}
    if "comment" in changes:
        values["text"] = changes["comment"].strip()
    if "photos" in changes:
        values["photos"] = list(changes["photos"])

    if values and not comment_repository.update_comment(post_id, comment_id, values):
        # deleted between the read and the update
        raise NotFoundError("Comment")

    return serialize_post(get_post_or_404(post_id))


def delete_comment(post_id, comment_id, user):
    comment = _get_comment_or_404(post_id, comment_id)
    _ensure_can_modify(comment, user)

    if not comment_repository.delete_comment(post_id, comment_id):
        raise NotFoundError("Comment")

    logger.info("Comment %s on post %s deleted by user %s", comment_id, post_id, user.id)


def set_comment_pinned(post_id, comment_id, pinned: bool, user):
    if not is_admin(user):
        raise ForbiddenError("Only admins can pin comments")

    _get_comment_or_404(post_id, comment_id)
    if not comment_repository.update_comment(post_id, comment_id, {"pinned": pinned}):
        raise NotFoundError("Comment")
