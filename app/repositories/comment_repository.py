from app.db import db
from app.models.comment_model import Comment


def create_comment(author_id, post_id, text, photos=None):
    comment = Comment(
        author_id=author_id,
        post_id=post_id,
        text=text.strip(),
        photos=list(photos or []),
    )

    db.session.add(comment)
    db.session.commit()
    return comment


def get_comment(post_id, comment_id):
    return Comment.query.filter_by(id=comment_id, post_id=post_id).first()


def update_comment(post_id, comment_id, values: dict) -> int:
    if not values:
        return 0

    updated = (
        Comment.query
        .filter_by(id=comment_id, post_id=post_id)
        .update(values, synchronize_session=False)
    )
    db.session.commit()
    return updated


def delete_comment(post_id, comment_id) -> int:
    deleted = (
        Comment.query
        .filter_by(id=comment_id, post_id=post_id)
        .delete(synchronize_session=False)
    )
    db.session.commit()
    return deleted
