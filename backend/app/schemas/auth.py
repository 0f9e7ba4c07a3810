# app/schemas/auth.py
"""
Pydantic schemas for authentication endpoints.
"""
from pydantic import BaseModel
from typing import Optional

class UserOut(BaseModel):
    """
    Signed-in member as returned by /auth/me.
    Contains display details only, never the Discord token.
    """
    id: int  # Internal user identifier
    username: str  # Discord username at last login
    avatar_url: str  # Discord CDN URL (default avatar when none set)
    is_admin: bool = False  # From the allow-list at last login

class MeOut(BaseModel):
    user: Optional[UserOut] = None  # None for anonymous visitors

class MeResponse(BaseModel):
    success: bool = True
    data: MeOut
