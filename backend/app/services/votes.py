"""
Vote ledger

At most one vote per (user, idea). Toggling removes an existing vote or adds
a missing one; the count is always aggregated from the votes table.
"""
import logging
from dataclasses import dataclass

from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from app.core.errors import NotFoundError
from app.models.idea import Idea
from app.models.vote import Vote

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class VoteToggle:
    voted: bool
    vote_count: int


async def count_for(idea_id: int, using_db=None) -> int:
    qs = Vote.filter(idea_id=idea_id)
    if using_db is not None:
        qs = qs.using_db(using_db)
    return await qs.count()


async def _ensure_idea(idea_id: int, conn) -> None:
    if not await Idea.filter(id=idea_id).using_db(conn).exists():
        raise NotFoundError("Idea not found")


async def _toggle_once(user_id: int, idea_id: int) -> VoteToggle:
    async with in_transaction() as conn:
        await _ensure_idea(idea_id, conn)
        removed = await Vote.filter(user_id=user_id, idea_id=idea_id).using_db(conn).delete()
        if not removed:
            # unique(user, idea) rejects a concurrent duplicate insert
            await Vote.create(user_id=user_id, idea_id=idea_id, using_db=conn)
        return VoteToggle(voted=not removed, vote_count=await count_for(idea_id, conn))


async def _remove_vote(user_id: int, idea_id: int) -> VoteToggle:
    async with in_transaction() as conn:
        await _ensure_idea(idea_id, conn)
        await Vote.filter(user_id=user_id, idea_id=idea_id).using_db(conn).delete()
        return VoteToggle(voted=False, vote_count=await count_for(idea_id, conn))


async def toggle(user_id: int, idea_id: int) -> VoteToggle:
    """
    Flip the user's vote on an idea and return the new state and total.

    Raises:
        NotFoundError: If the idea does not exist
    """
    try:
        result = await _toggle_once(user_id, idea_id)
    except IntegrityError:
        # Lost an insert race against the same (user, idea): the vote already exists, so this toggle removes it
        logger.info("[votes] concurrent toggle by user %s on idea %s, retrying as removal", user_id, idea_id)
        result = await _remove_vote(user_id, idea_id)

    logger.info(
        "[votes] user %s %s idea %s (count=%s)",
        user_id, "voted for" if result.voted else "removed vote from", idea_id, result.vote_count,
    )
    return result
