import logging
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from app.api.v1.deps import get_discord_gateway, get_identity_store, get_optional_user
from app.config import settings
from app.core.errors import UpstreamAuthError
from app.core.security import (
    ACCESS_TOKEN_COOKIE,
    ACCESS_TOKEN_EXPIRE_MINUTES,
    OAUTH_STATE_COOKIE,
    OAUTH_STATE_MAX_AGE_SEC,
    create_access_token,
    generate_state,
    validate_state,
)
from app.models.user import User
from app.schemas.auth import MeResponse
from app.services.discord import DiscordGateway, avatar_url
from app.services.identity import IdentityStore

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/auth", tags=["auth"])


def _frontend_redirect(error: str | None = None) -> RedirectResponse:
    url = settings.frontend_url
    if error:
        url = f"{url}?{urlencode({'error': error})}"
    response = RedirectResponse(url)
    response.delete_cookie(OAUTH_STATE_COOKIE)
    return response


def _user_to_dict(u: User) -> dict:
    return {
        "id": u.id,
        "username": u.display_name,
        "avatar_url": avatar_url(u.external_id, u.avatar_ref),
        "is_admin": u.is_admin,
    }


@router.get("/login")
async def login(gateway: DiscordGateway = Depends(get_discord_gateway)):
    """
    Start the Discord OAuth flow.

    Generates a fresh anti-forgery state, keeps it in a short-lived HttpOnly
    cookie and redirects the browser to Discord's consent screen.
    """
    state = generate_state()
    response = RedirectResponse(gateway.build_authorization_url(state))
    response.set_cookie(
        OAUTH_STATE_COOKIE,
        state,
        max_age=OAUTH_STATE_MAX_AGE_SEC,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return response


@router.get("/callback")
async def callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    gateway: DiscordGateway = Depends(get_discord_gateway),
    store: IdentityStore = Depends(get_identity_store),
):
    """
    Handle the Discord OAuth callback.

    Validates the state, exchanges the code, checks guild membership and
    upserts the member. On success the session token is set as an HttpOnly
    cookie and the browser goes back to the frontend; every failure also
    redirects, with an `error` query parameter:
        - invalid_state: state missing or not matching the cookie
        - no_code: Discord returned without an authorization code
        - not_member: the account is not in the required guild
        - auth_failed: Discord rejected or failed one of the calls
    """
    if not validate_state(request.cookies.get(OAUTH_STATE_COOKIE), state):
        logger.warning("[auth] invalid OAuth state")
        return _frontend_redirect("invalid_state")

    if not code:
        return _frontend_redirect("no_code")

    try:
        token = await gateway.exchange_code(code)
        profile = await gateway.fetch_profile(token)
        is_member = await gateway.is_member_of_required_group(token, settings.tinkerer_guild_id)
    except UpstreamAuthError as e:
        logger.warning("[auth] OAuth callback failed: %s", e.message)
        return _frontend_redirect("auth_failed")

    if not is_member:
        logger.info("[auth] %s (%s) is not a member of the required guild", profile.display_name, profile.id)
        return _frontend_redirect("not_member")

    user = await store.upsert_from_external_profile(profile, store.is_admin(profile.id))
    logger.info("[auth] %s logged in (admin=%s)", user.display_name, user.is_admin)

    response = _frontend_redirect()
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        create_access_token(str(user.id), user.role),
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return response


@router.get("/logout")
async def logout():
    """Clear the session cookie and go back to the frontend."""
    response = _frontend_redirect()
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    return response


@router.get("/me", response_model=MeResponse)
async def me(user: User | None = Depends(get_optional_user)):
    """
    Current member, or `{"user": null}` for anonymous visitors (never 401).
    """
    return {"success": True, "data": {"user": _user_to_dict(user) if user else None}}
