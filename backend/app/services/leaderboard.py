"""
Leaderboard assembler

Joins every idea with its author and vote count and ranks them: most votes
first, newer ideas first on equal counts. Each entry also says whether the
viewer has voted for it.
"""
from tortoise.functions import Count

from app.models.idea import Idea
from app.models.vote import Vote
from app.services.discord import avatar_url

# id breaks the (theoretical) tie of two ideas created in the same instant
LEADERBOARD_ORDER = ("-vote_count", "-created_at", "-id")


def serialize_idea(idea: Idea, vote_count: int, user_voted: bool) -> dict:
    """Wire view of an idea; `idea.owner` must already be loaded."""
    owner = idea.owner
    return {
        "id": idea.id,
        "title": idea.title,
        "description": idea.description,
        "created_at": idea.created_at.isoformat() if idea.created_at else None,
        "updated_at": idea.updated_at.isoformat() if idea.updated_at else None,
        "author": {
            "id": owner.id,
            "username": owner.display_name,
            "avatar_url": avatar_url(owner.external_id, owner.avatar_ref),
        },
        "vote_count": int(vote_count),
        "user_voted": bool(user_voted),
    }


async def voted_idea_ids(viewer_id: int | None) -> set[int]:
    if viewer_id is None:
        return set()
    return set(await Vote.filter(user_id=viewer_id).values_list("idea_id", flat=True))


async def list_ideas(viewer_id: int | None = None) -> list[dict]:
    """
    Full ranked listing. Ideas without votes are included with a count of 0.
    Anonymous viewers (viewer_id=None) get user_voted=False everywhere.
    """
    ideas = await (
        Idea.all()
        .annotate(vote_count=Count("votes"))
        .order_by(*LEADERBOARD_ORDER)
        .prefetch_related("owner")
    )
    voted = await voted_idea_ids(viewer_id)
    return [serialize_idea(i, i.vote_count, i.id in voted) for i in ideas]
