import jwt
from fastapi import Depends, Header, Request
from app.config import settings
from app.core.errors import AuthRequiredError, ForbiddenError
from app.core.security import ACCESS_TOKEN_COOKIE, decode_access_token
from app.models.user import User
from app.services.discord import DiscordGateway
from app.services.identity import IdentityStore

_identity_store = IdentityStore(settings.admin_ids)


def _extract_token(request: Request, authorization: str | None) -> str | None:
    # 1) Prioritize Authorization: Bearer xxx
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
        if token:
            return token
    # 2) Secondly HttpOnly Cookie: accessToken
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


async def get_optional_user(
    request: Request,
    authorization: str | None = Header(default=None),
) -> User | None:
    """
    FastAPI dependency returning the signed-in member, or None for anonymous
    visitors. An invalid or expired token is treated as anonymous.

    The user row is always re-read, so is_admin reflects the last login.
    """
    token = _extract_token(request, authorization)
    if not token:
        return None
    try:
        payload = decode_access_token(token)
        user_id = int(payload.get("sub"))
    except (jwt.InvalidTokenError, TypeError, ValueError):
        return None
    return await User.get_or_none(id=user_id)


async def get_current_user(
    request: Request,
    authorization: str | None = Header(default=None),
) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Raises:
        AuthRequiredError (401): If no token is provided, the token is
            invalid or expired, or the user no longer exists
    """
    user = await get_optional_user(request, authorization)
    if not user:
        raise AuthRequiredError()
    return user


async def require_admin(current: User = Depends(get_current_user)) -> User:
    """
    FastAPI dependency to ensure the current user is an administrator.

    Raises:
        ForbiddenError (403): If user is not an admin
        AuthRequiredError (401): If user is not authenticated (from get_current_user)
    """
    if not current.is_admin:
        raise ForbiddenError("Admin access required")
    return current


def get_identity_store() -> IdentityStore:
    """Identity store bound to the allow-list loaded at startup."""
    return _identity_store


def get_discord_gateway() -> DiscordGateway:
    return DiscordGateway(settings)
