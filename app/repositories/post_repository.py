from sqlalchemy.orm import selectinload

from app.models.post_model import Post
from app.db import db


def get_by_id(post_id: int):
    return db.session.get(Post, post_id)


def find_posts(author_id=None, created_from=None, created_before=None, created_until=None):
    query = Post.query.options(
        selectinload(Post.comments),
        selectinload(Post.reactions),
    )

    if author_id is not None:
        query = query.filter(Post.author_id == author_id)
    if created_from is not None:
        query = query.filter(Post.created_at >= created_from)
    if created_before is not None:
        query = query.filter(Post.created_at < created_before)
    if created_until is not None:
        query = query.filter(Post.created_at <= created_until)

    return (
        query
        .order_by(Post.pinned.desc(), Post.created_at.desc(), Post.id.desc())
        .all()
    )


def create_post(author_id, content, title=None, photos=None):
    post = Post(
        author_id=author_id,
        title=title,
        content=content,
        photos=list(photos or []),
    )
    db.session.add(post)
    db.session.commit()
    return post


def delete_post(post):
    db.session.delete(post)
    db.session.commit()


def set_pinned(post_id: int, pinned: bool) -> bool:
    updated = (
        Post.query
        .filter(Post.id == post_id)
        .update(
            {Post.pinned: pinned, Post.version: Post.version + 1},
            synchronize_session=False,
        )
    )
    db.session.commit()
    return updated > 0
