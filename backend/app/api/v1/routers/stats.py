from fastapi import APIRouter
from app.schemas.idea import StatsResponse
from app.services.stats import snapshot

router = APIRouter(tags=["stats"])

@router.get("/stats", response_model=StatsResponse)
async def stats():
    """Idea, vote and member totals for the board header."""
    s = await snapshot()
    return {"success": True, "data": {"ideas": s.idea_count, "votes": s.vote_count, "members": s.member_count}}
