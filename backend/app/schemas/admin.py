# app/schemas/admin.py
"""
Pydantic schemas for admin member management endpoints.
"""
from pydantic import BaseModel
from typing import Optional, List

class AdminUserBase(BaseModel):
    """
    Member row as seen by admins.
    """
    id: int  # Internal user identifier
    external_id: str  # Discord user id
    username: str  # Discord username at last login
    avatar_url: str
    is_admin: bool
    created_at: Optional[str] = None  # First login (ISO format)
    last_login_at: Optional[str] = None  # Most recent login (ISO format)


class AdminUserListOut(BaseModel):
    """
    Response model for the member list endpoint (unpaginated).
    """
    items: List[AdminUserBase]
    total: int
