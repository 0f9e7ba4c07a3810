"""Board-wide counters. Three independent counts, no transaction."""
from dataclasses import dataclass

from app.models.idea import Idea
from app.models.user import User
from app.models.vote import Vote


@dataclass(frozen=True)
class StatsSnapshot:
    idea_count: int
    vote_count: int
    member_count: int


async def snapshot() -> StatsSnapshot:
    return StatsSnapshot(
        idea_count=await Idea.all().count(),
        vote_count=await Vote.all().count(),
        member_count=await User.all().count(),
    )
