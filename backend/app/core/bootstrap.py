# app/core/bootstrap.py
"""
Bootstrap module for application initialization.
Checks at startup that the settings needed for sign-in are present.
"""
import logging
from app.config import Settings, settings as default_settings
from app.core import security

logger = logging.getLogger("uvicorn.error")

def check_oauth_settings(config: Settings | None = None) -> list[str]:
    """
    Log a warning for every sign-in setting left at an unusable default.
    The app still starts so the leaderboard stays readable; logins will fail
    until the settings are fixed.

    Returns:
        The names of the missing/unsafe settings (empty when all is well)
    """
    cfg = config or default_settings
    problems = []
    if not cfg.discord_client_id or not cfg.discord_client_secret:
        problems.append("DISCORD_CLIENT_ID/DISCORD_CLIENT_SECRET")
    if not cfg.tinkerer_guild_id:
        # Without a guild id nobody passes the membership check
        problems.append("TINKERER_GUILD_ID")
    if security.JWT_SECRET == "dev-secret" and cfg.env != "dev":
        problems.append("JWT_SECRET")

    for name in problems:
        logger.warning("[bootstrap] %s is not configured -> sign-in will not work as expected", name)
    if not cfg.admin_ids:
        logger.warning("[bootstrap] ADMIN_DISCORD_IDS is empty -> nobody can moderate ideas")
    return problems
