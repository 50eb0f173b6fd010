from app.extensions.broadcaster import REACTION, get_broadcaster
from app.repositories import reaction_repository
from app.schemas.post_schema import ReactionSchema
from app.schemas.validation import load_payload
from app.services.post_service import get_post_or_404, serialize_post


def react(post_id, user, data):
    reaction_type = load_payload(ReactionSchema(), data)["reaction"]
    get_post_or_404(post_id)

    reaction_repository.upsert_reaction(
        post_id=post_id,
        user_id=user.id,
        reaction_type=reaction_type
    )

    get_broadcaster().broadcast(
        REACTION,
        {"post_id": post_id, "user_id": user.id, "type": reaction_type.value},
    )
    return serialize_post(get_post_or_404(post_id))


def remove_reaction(post_id, user):
    get_post_or_404(post_id)
    return reaction_repository.delete_reaction(post_id, user.id)
