"""
Services Module

Domain logic and external integrations:
- Discord OAuth gateway (identity provider adapter)
- Identity store (member upsert, admin allow-list)
- Ideas (create / update / delete with ownership rules)
- Votes (one-vote-per-member toggle)
- Leaderboard (ranked listing with the viewer's vote state)
- Stats (board-wide counters)
"""

from .discord import (
    DiscordGateway,
    ExternalProfile,
    ExternalToken,
    avatar_url,
)
from .identity import IdentityStore
from .ideas import (
    create_idea,
    update_idea,
    delete_idea,
    sanitize_input,
)
from .votes import VoteToggle, toggle
from .leaderboard import list_ideas, serialize_idea
from .stats import StatsSnapshot, snapshot

__all__ = [
    # Identity provider
    "DiscordGateway",
    "ExternalProfile",
    "ExternalToken",
    "avatar_url",
    # Members
    "IdentityStore",
    # Ideas
    "create_idea",
    "update_idea",
    "delete_idea",
    "sanitize_input",
    # Votes
    "VoteToggle",
    "toggle",
    # Leaderboard
    "list_ideas",
    "serialize_idea",
    # Stats
    "StatsSnapshot",
    "snapshot",
]
