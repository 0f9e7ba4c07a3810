"""
Session/identity store

Maps a verified Discord identity onto an internal User row. The admin
allow-list is handed in at construction time and never read from request
input.
"""
import logging
from collections.abc import Iterable

from tortoise import timezone
from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from app.core.errors import NotFoundError
from app.models.idea import Idea
from app.models.user import User
from app.models.vote import Vote
from app.services.discord import ExternalProfile

logger = logging.getLogger("uvicorn.error")


class IdentityStore:
    def __init__(self, admin_ids: Iterable[str]):
        self.admin_ids = frozenset(str(i) for i in admin_ids)

    def is_admin(self, external_id: str) -> bool:
        return str(external_id) in self.admin_ids

    async def upsert_from_external_profile(self, profile: ExternalProfile, is_admin: bool) -> User:
        """
        Create the user on first login, otherwise refresh the mutable fields.

        Display name, avatar, admin flag and last-login time are overwritten
        on every call; the internal id and external id never change.
        """
        now = timezone.now()
        user = await User.get_or_none(external_id=profile.id)
        if user:
            return await self._refresh(user, profile, is_admin, now)

        try:
            user = await User.create(
                external_id=profile.id,
                display_name=profile.display_name,
                avatar_ref=profile.avatar_ref,
                is_admin=is_admin,
                last_login_at=now,
            )
        except IntegrityError:
            # A parallel first login inserted the same external id: update that row instead
            logger.info("[identity] concurrent first login for %s, updating existing row", profile.id)
            user = await User.get(external_id=profile.id)
            return await self._refresh(user, profile, is_admin, now)
        logger.info("[identity] new member %s (%s)", user.display_name, user.external_id)
        return user

    async def _refresh(self, user: User, profile: ExternalProfile, is_admin: bool, now) -> User:
        user.display_name = profile.display_name
        user.avatar_ref = profile.avatar_ref
        user.is_admin = is_admin
        user.last_login_at = now
        await user.save(update_fields=["display_name", "avatar_ref", "is_admin", "last_login_at"])
        return user

    async def list_users(self) -> list[User]:
        return await User.all().order_by("-created_at", "-id")

    async def remove_user(self, user_id: int) -> None:
        """Administrative removal; the user's ideas and votes cascade with it."""
        user = await User.get_or_none(id=user_id)
        if not user:
            raise NotFoundError("User not found")
        # Foreign keys cascade, but delete dependents explicitly so every backend ends up in the same state
        async with in_transaction() as conn:
            idea_ids = await Idea.filter(owner_id=user.id).using_db(conn).values_list("id", flat=True)
            await Vote.filter(user_id=user.id).using_db(conn).delete()
            if idea_ids:
                await Vote.filter(idea_id__in=list(idea_ids)).using_db(conn).delete()
            await Idea.filter(owner_id=user.id).using_db(conn).delete()
            await user.delete(using_db=conn)
        logger.info("[identity] removed user %s (%s)", user.display_name, user.external_id)
