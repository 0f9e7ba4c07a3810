from fastapi import APIRouter, Depends
from app.api.v1.deps import get_current_user
from app.models.user import User
from app.schemas.idea import VoteResponse
from app.services.votes import toggle

router = APIRouter(prefix="/votes", tags=["votes"])

@router.post("/{idea_id}", response_model=VoteResponse)
async def toggle_vote(idea_id: int, user: User = Depends(get_current_user)):
    """
    Vote for an idea, or take the vote back if it was already given.

    Returns:
        dict: {"success": True, "data": {"voted": bool, "vote_count": int}}

    Raises:
        AuthRequiredError (401): If user is not authenticated
        NotFoundError (404): If the idea does not exist
    """
    result = await toggle(user.id, idea_id)
    return {"success": True, "data": {"voted": result.voted, "vote_count": result.vote_count}}
