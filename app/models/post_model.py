from datetime import datetime

from app.db import db


class Post(db.Model):
    __tablename__ = "posts"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=True)
    content = db.Column(db.Text, nullable=False)
    author_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    pinned = db.Column(db.Boolean, default=False, nullable=False)
    # image ids, in display order
    photos = db.Column(db.JSON, default=list, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )
    version = db.Column(db.Integer, nullable=False)

    comments = db.relationship(
        "Comment",
        backref="post",
        lazy="select",
        order_by="Comment.id",
        cascade="all, delete-orphan",
    )

    reactions = db.relationship(
        "Reaction",
        backref="post",
        lazy="select",
        order_by="Reaction.id",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version}
