"""
Idea repository

Create, update and delete ideas. Only the owner may edit an idea; the owner
or any admin may delete it.
"""
import logging

from tortoise.transactions import in_transaction

from app.core.errors import ForbiddenError, NotFoundError, ValidationError
from app.models.idea import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, TITLE_MIN_LENGTH, Idea
from app.models.user import User
from app.models.vote import Vote

logger = logging.getLogger("uvicorn.error")


def sanitize_input(value, max_length: int) -> str:
    """
    Trim free text and cap its length.

    The cap sits one character past max_length so that an over-long value
    still fails validation instead of being cut down to a passing length.
    Non-string input becomes an empty string.
    """
    if not isinstance(value, str):
        return ""
    return value.strip()[: max_length + 1]


def _clean_fields(title, description) -> tuple[str, str]:
    title = sanitize_input(title, TITLE_MAX_LENGTH)
    description = sanitize_input(description, DESCRIPTION_MAX_LENGTH)

    if len(title) < TITLE_MIN_LENGTH:
        raise ValidationError(f"Title must be at least {TITLE_MIN_LENGTH} characters")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters")
    return title, description


async def create_idea(owner: User, title, description=None) -> Idea:
    title, description = _clean_fields(title, description)
    idea = await Idea.create(title=title, description=description, owner=owner)
    logger.info("[ideas] %s created idea %s: %s", owner.display_name, idea.id, title)
    return idea


async def _get_idea(idea_id: int) -> Idea:
    idea = await Idea.get_or_none(id=idea_id)
    if not idea:
        raise NotFoundError("Idea not found")
    return idea


async def update_idea(idea_id: int, requesting_user_id: int, title, description=None) -> Idea:
    idea = await _get_idea(idea_id)
    if idea.owner_id != requesting_user_id:
        raise ForbiddenError("You can only edit your own ideas")

    idea.title, idea.description = _clean_fields(title, description)
    await idea.save(update_fields=["title", "description", "updated_at"])
    logger.info("[ideas] user %s updated idea %s", requesting_user_id, idea_id)
    return idea


async def delete_idea(idea_id: int, requesting_user_id: int, requesting_user_is_admin: bool) -> None:
    idea = await _get_idea(idea_id)
    if idea.owner_id != requesting_user_id and not requesting_user_is_admin:
        raise ForbiddenError("You can only delete your own ideas")

    # Votes go with the idea (foreign key cascades, but manual is clearer)
    async with in_transaction() as conn:
        await Vote.filter(idea_id=idea.id).using_db(conn).delete()
        await idea.delete(using_db=conn)
    logger.info("[ideas] user %s deleted idea %s", requesting_user_id, idea_id)
