# app/models/user.py
"""
Database model for users.
Represents a community member signed in through Discord. Rows are created on
first login and refreshed (name, avatar, admin flag, last login) on every
later login.
"""
from tortoise import fields, models

class User(models.Model):
    """
    User database model.

    Relationships:
    - Has many Ideas (one-to-many, via related_name="ideas")
    - Has many Votes (one-to-many, via related_name="votes")

    Notes:
    - external_id is the Discord snowflake id and never changes
    - is_admin is derived from the configured allow-list at login time and
      stays as stored until the next login
    """
    id = fields.IntField(pk=True)  # Primary key: internal user identifier
    external_id = fields.CharField(
        max_length=32,
        unique=True,
        index=True
    )  # Discord user id (unique, indexed for login lookups)
    display_name = fields.CharField(max_length=100)  # Discord username at last login
    avatar_ref = fields.CharField(max_length=100, null=True)  # Discord avatar hash (null = default avatar)
    is_admin = fields.BooleanField(default=False)  # Recomputed from the allow-list on every login
    created_at = fields.DatetimeField(auto_now_add=True)  # First successful login
    last_login_at = fields.DatetimeField(null=True)  # Most recent successful login

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"  # Database table name

    @property
    def role(self) -> str:
        return "admin" if self.is_admin else "user"
