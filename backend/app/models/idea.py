# app/models/idea.py
"""
Database model for ideas.
An idea is a member-submitted proposal and the unit being voted on. The vote
count is never stored here; it is always aggregated from the votes table.
"""
from tortoise import fields, models

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000

class Idea(models.Model):
    """
    Idea database model.

    Relationships:
    - Belongs to a User (many-to-one); deleting the user deletes the idea
    - Has many Votes (one-to-many, via related_name="votes")
    """
    id = fields.IntField(pk=True)
    title = fields.CharField(max_length=TITLE_MAX_LENGTH)
    description = fields.TextField(default="")  # Empty string when not provided
    owner = fields.ForeignKeyField(
        "models.User",
        related_name="ideas",
        on_delete=fields.CASCADE
    )  # Immutable after creation
    created_at = fields.DatetimeField(auto_now_add=True, index=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "ideas"
