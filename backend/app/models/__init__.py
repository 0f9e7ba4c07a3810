# app/models/__init__.py
"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: Discord-backed member account
- Idea: Member-submitted proposal
- Vote: A member's upvote on an idea (unique per user and idea)
"""
from .user import User
from .idea import Idea
from .vote import Vote
