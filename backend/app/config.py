# app/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_set(name: str, default: str) -> frozenset[str]:
    raw = os.getenv(name, default)
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Tinkerer Vote API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Discord OAuth (identity provider)
    discord_client_id: str = os.getenv("DISCORD_CLIENT_ID", "")
    discord_client_secret: str = os.getenv("DISCORD_CLIENT_SECRET", "")
    discord_redirect_uri: str = os.getenv("DISCORD_REDIRECT_URI", "http://localhost:3000/api/v1/auth/callback")
    discord_api_base: str = os.getenv("DISCORD_API_BASE", "https://discord.com/api/v10")
    discord_authorize_url: str = os.getenv("DISCORD_AUTHORIZE_URL", "https://discord.com/oauth2/authorize")
    discord_cdn_base: str = os.getenv("DISCORD_CDN_BASE", "https://cdn.discordapp.com")
    discord_timeout_sec: float = float(os.getenv("DISCORD_TIMEOUT_SEC", "10"))

    # Members must belong to this guild to sign in
    tinkerer_guild_id: str = os.getenv("TINKERER_GUILD_ID", "")

    # Static admin allow-list of Discord user ids, loaded once at startup
    admin_ids: frozenset[str] = _env_set("ADMIN_DISCORD_IDS", "103551461266296832,752150652309864489")

    # Browser-facing settings
    frontend_url: str = os.getenv("FRONTEND_URL", "/")
    cookie_secure: bool = _env_flag("COOKIE_SECURE", "false")
    static_dir: str = os.getenv("STATIC_DIR", "public")


settings = Settings()  # Instantiate configuration
