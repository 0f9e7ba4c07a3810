# app/schemas/idea.py
"""
Pydantic schemas for idea, vote and leaderboard endpoints.
Length rules are enforced by the idea service after trimming, so the input
models only fix the shape of the body.
"""
from pydantic import BaseModel
from typing import Optional, List

class IdeaIn(BaseModel):
    """
    Request model for creating or editing an idea.
    """
    title: str  # 3-200 characters after trimming
    description: Optional[str] = None  # Up to 2000 characters after trimming

class AuthorOut(BaseModel):
    id: int
    username: str
    avatar_url: str

class IdeaOut(BaseModel):
    """
    One leaderboard entry.
    vote_count is aggregated from the votes table; user_voted is relative to
    the requesting member (always False for anonymous viewers).
    """
    id: int
    title: str
    description: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    author: AuthorOut
    vote_count: int = 0
    user_voted: bool = False

class LeaderboardOut(BaseModel):
    ideas: List[IdeaOut]

class IdeaCreatedOut(BaseModel):
    idea: IdeaOut

class VoteOut(BaseModel):
    voted: bool  # State after the toggle
    vote_count: int  # Total votes on the idea after the toggle

class StatsOut(BaseModel):
    ideas: int
    votes: int
    members: int

# ===== Success envelopes: {"success": true, "data": {...}} =====
class LeaderboardResponse(BaseModel):
    success: bool = True
    data: LeaderboardOut

class IdeaCreatedResponse(BaseModel):
    success: bool = True
    data: IdeaCreatedOut

class VoteResponse(BaseModel):
    success: bool = True
    data: VoteOut

class StatsResponse(BaseModel):
    success: bool = True
    data: StatsOut
