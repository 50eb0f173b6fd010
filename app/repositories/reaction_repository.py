from sqlalchemy.exc import IntegrityError

from app.db import db
from app.models.reaction_model import Reaction


def _update_type(post_id, user_id, reaction_type) -> int:
    return (
        Reaction.query
        .filter_by(post_id=post_id, user_id=user_id)
        .update({Reaction.type: reaction_type}, synchronize_session=False)
    )


def upsert_reaction(post_id, user_id, reaction_type) -> bool:
    """Set the user's reaction on a post. Returns True when a row was inserted.

    The unique (post_id, user_id) constraint arbitrates concurrent inserts:
    the loser of the race falls back to updating the winner's row.
    """
    if _update_type(post_id, user_id, reaction_type):
        db.session.commit()
        return False

    db.session.add(
        Reaction(
            post_id=post_id,
            user_id=user_id,
            type=reaction_type
        )
    )
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        _update_type(post_id, user_id, reaction_type)
        db.session.commit()
        return False

    return True


def delete_reaction(post_id, user_id) -> int:
    deleted = (
        Reaction.query
        .filter_by(post_id=post_id, user_id=user_id)
        .delete(synchronize_session=False)
    )
    db.session.commit()
    return deleted
