from fastapi import APIRouter, Depends, status
from app.api.v1.deps import get_current_user, get_optional_user
from app.models.user import User
from app.schemas.idea import IdeaCreatedResponse, IdeaIn, LeaderboardResponse
from app.services import ideas as idea_service
from app.services.leaderboard import list_ideas, serialize_idea

router = APIRouter(tags=["ideas"])

# ===== Routes =====
@router.get("/leaderboard", response_model=LeaderboardResponse)
async def leaderboard(viewer: User | None = Depends(get_optional_user)):
    """
    Get every idea ranked by votes.

    Ordered by vote count (highest first), then by creation time (newest
    first). Anonymous visitors get `user_voted: false` on every entry.

    Returns:
        dict: {"success": True, "data": {"ideas": [IdeaOut, ...]}}
    """
    ideas = await list_ideas(viewer.id if viewer else None)
    return {"success": True, "data": {"ideas": ideas}}

@router.post("/ideas", response_model=IdeaCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_idea(body: IdeaIn, user: User = Depends(get_current_user)):
    """
    Submit a new idea.

    Title and description are trimmed first; the title must then be 3-200
    characters and the description at most 2000.

    Returns:
        dict: {"success": True, "data": {"idea": IdeaOut}} with vote_count 0

    Raises:
        AuthRequiredError (401): If user is not authenticated
        ValidationError (400): If the trimmed fields break the length rules
    """
    idea = await idea_service.create_idea(user, body.title, body.description)
    return {"success": True, "data": {"idea": serialize_idea(idea, 0, False)}}

@router.put("/ideas/{idea_id}", response_model=dict)
async def update_idea(idea_id: int, body: IdeaIn, user: User = Depends(get_current_user)):
    """
    Edit the title/description of an idea (author only).

    Raises:
        AuthRequiredError (401): If user is not authenticated
        NotFoundError (404): If the idea does not exist
        ForbiddenError (403): If the user is not the author
        ValidationError (400): If the trimmed fields break the length rules
    """
    await idea_service.update_idea(idea_id, user.id, body.title, body.description)
    return {"success": True, "data": {"id": idea_id, "updated": True}}

@router.delete("/ideas/{idea_id}", response_model=dict)
async def delete_idea(idea_id: int, user: User = Depends(get_current_user)):
    """
    Delete an idea and all its votes (author or admin).

    Raises:
        AuthRequiredError (401): If user is not authenticated
        NotFoundError (404): If the idea does not exist
        ForbiddenError (403): If the user is neither the author nor an admin
    """
    await idea_service.delete_idea(idea_id, user.id, user.is_admin)
    return {"success": True, "data": {"id": idea_id, "deleted": True}}
