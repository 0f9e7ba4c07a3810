"""
Discord OAuth gateway

Thin I/O adapter around the Discord OAuth2 authorization-code flow:
authorization URL, code exchange, profile and guild lookups, and avatar URLs.
No business logic lives here.
"""
import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from app.config import Settings, settings as default_settings
from app.core.errors import UpstreamAuthError

logger = logging.getLogger("uvicorn.error")

OAUTH_SCOPES = "identify guilds"
DEFAULT_AVATAR_VARIANTS = 6


@dataclass(frozen=True)
class ExternalToken:
    access_token: str
    token_type: str = "Bearer"


@dataclass(frozen=True)
class ExternalProfile:
    id: str
    display_name: str
    avatar_ref: str | None = None


def avatar_url(external_id: str, avatar_ref: str | None, cdn_base: str | None = None) -> str:
    """
    Build the CDN URL for a member's avatar.

    Without an avatar hash one of the default avatars is picked from the
    snowflake id; animated hashes (prefix "a_") are served as gif.
    """
    cdn = (cdn_base or default_settings.discord_cdn_base).rstrip("/")
    if not avatar_ref:
        try:
            index = (int(external_id) >> 22) % DEFAULT_AVATAR_VARIANTS
        except (TypeError, ValueError):
            index = 0
        return f"{cdn}/embed/avatars/{index}.png"

    extension = "gif" if avatar_ref.startswith("a_") else "png"
    return f"{cdn}/avatars/{external_id}/{avatar_ref}.{extension}"


class DiscordGateway:
    """Discord OAuth2 client"""

    def __init__(self, config: Settings | None = None):
        cfg = config or default_settings
        self.client_id = cfg.discord_client_id
        self.client_secret = cfg.discord_client_secret
        self.redirect_uri = cfg.discord_redirect_uri
        self.api_base = cfg.discord_api_base.rstrip("/")
        self.authorize_url = cfg.discord_authorize_url
        self.timeout = cfg.discord_timeout_sec

    def build_authorization_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": OAUTH_SCOPES,
            "state": state,
        }
        return f"{self.authorize_url}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> ExternalToken:
        """
        Exchange an authorization code for an access token.

        Raises:
            UpstreamAuthError: on a non-success response, an unreadable body
                or a transport failure
        """
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.redirect_uri,
        }
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(f"{self.api_base}/oauth2/token", data=data, headers=headers)
        except httpx.HTTPError as e:
            raise UpstreamAuthError("Failed to exchange code") from e

        if not resp.is_success:
            logger.warning("[discord] token exchange failed: status=%s body=%s", resp.status_code, resp.text[:200])
            raise UpstreamAuthError("Failed to exchange code")

        try:
            body = resp.json()
            token = body.get("access_token")
            token_type = body.get("token_type") or "Bearer"
        except (ValueError, AttributeError) as e:
            logger.warning("[discord] token exchange returned an unreadable body: %s", resp.text[:200])
            raise UpstreamAuthError("Failed to exchange code") from e
        if not token:
            raise UpstreamAuthError("Token response did not include an access token")
        return ExternalToken(access_token=token, token_type=token_type)

    async def _get_json(self, path: str, token: ExternalToken, what: str):
        headers = {"Authorization": f"Bearer {token.access_token}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(f"{self.api_base}{path}", headers=headers)
        except httpx.HTTPError as e:
            raise UpstreamAuthError(f"Failed to get {what}") from e

        if not resp.is_success:
            logger.warning("[discord] GET %s failed: status=%s", path, resp.status_code)
            raise UpstreamAuthError(f"Failed to get {what}")
        try:
            return resp.json()
        except ValueError as e:
            logger.warning("[discord] GET %s returned a non-JSON body", path)
            raise UpstreamAuthError(f"Failed to get {what}") from e

    async def fetch_profile(self, token: ExternalToken) -> ExternalProfile:
        data = await self._get_json("/users/@me", token, "user info")
        try:
            external_id = str(data["id"])
            return ExternalProfile(
                id=external_id,
                display_name=data.get("username") or "",
                avatar_ref=data.get("avatar"),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise UpstreamAuthError("User info did not include an id") from e

    async def fetch_group_membership(self, token: ExternalToken) -> set[str]:
        guilds = await self._get_json("/users/@me/guilds", token, "user guilds")
        if not isinstance(guilds, list):
            raise UpstreamAuthError("Guild list was not a list")
        return {str(g["id"]) for g in guilds if isinstance(g, dict) and "id" in g}

    async def is_member_of_required_group(self, token: ExternalToken, required_group_id: str) -> bool:
        if not required_group_id:
            return False
        return required_group_id in await self.fetch_group_membership(token)
