import enum
from datetime import datetime

from app.db import db


class ReactionType(str, enum.Enum):
    LIKE = "like"
    FUNNY = "funny"
    SAD = "sad"
    ANGRY = "angry"


class Reaction(db.Model):
    __tablename__ = "reactions"

    id = db.Column(db.Integer, primary_key=True)

    post_id = db.Column(
        db.Integer,
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)

    type = db.Column(
        db.Enum(
            ReactionType,
            name="reaction_type",
            values_callable=lambda types: [t.value for t in types],
        ),
        nullable=False,
    )

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint(
            "post_id", "user_id",
            name="unique_user_reaction"
        ),
    )
