"""
Integration tests for services.identity (member upsert and removal).
"""
import asyncio

import pytest

from app.core.errors import NotFoundError
from app.models.idea import Idea
from app.models.user import User
from app.models.vote import Vote
from app.services.discord import ExternalProfile
from app.services.identity import IdentityStore


pytestmark = pytest.mark.asyncio

ADMIN_ID = "103551461266296832"


async def test_is_admin_is_a_pure_allow_list_check():
    store = IdentityStore([ADMIN_ID])
    assert store.is_admin(ADMIN_ID) is True
    assert store.is_admin("999") is False
    assert isinstance(store.admin_ids, frozenset)


async def test_first_login_creates_user(db):
    store = IdentityStore([ADMIN_ID])
    profile = ExternalProfile(id="555", display_name="tinker", avatar_ref="hash1")

    user = await store.upsert_from_external_profile(profile, store.is_admin(profile.id))

    assert user.id is not None
    assert user.external_id == "555"
    assert user.display_name == "tinker"
    assert user.avatar_ref == "hash1"
    assert user.is_admin is False
    assert user.last_login_at is not None
    assert await User.all().count() == 1


async def test_second_login_refreshes_fields_and_keeps_id(db):
    first = await IdentityStore([]).upsert_from_external_profile(
        ExternalProfile(id=ADMIN_ID, display_name="old", avatar_ref=None), False,
    )

    # Allow-list changed between logins: the flag follows on the next login
    store = IdentityStore([ADMIN_ID])
    second = await store.upsert_from_external_profile(
        ExternalProfile(id=ADMIN_ID, display_name="new", avatar_ref="a_anim"), store.is_admin(ADMIN_ID),
    )

    assert second.id == first.id
    reloaded = await User.get(id=first.id)
    assert reloaded.display_name == "new"
    assert reloaded.avatar_ref == "a_anim"
    assert reloaded.is_admin is True
    assert reloaded.last_login_at is not None
    assert await User.all().count() == 1


async def test_stored_admin_flag_is_stale_until_next_login(db):
    store = IdentityStore([ADMIN_ID])
    user = await store.upsert_from_external_profile(
        ExternalProfile(id=ADMIN_ID, display_name="boss"), store.is_admin(ADMIN_ID),
    )

    # A new allow-list does not touch existing rows
    assert IdentityStore([]).is_admin(ADMIN_ID) is False
    assert (await User.get(id=user.id)).is_admin is True


async def test_remove_user_cascades_ideas_and_votes(db, create_user):
    store = IdentityStore([])
    author = await create_user()
    voter = await create_user()
    own_idea = await Idea.create(title="Author idea", owner=author)
    other_idea = await Idea.create(title="Voter idea", owner=voter)
    await Vote.create(user=voter, idea=own_idea)
    await Vote.create(user=author, idea=other_idea)

    await store.remove_user(author.id)

    assert await User.filter(id=author.id).count() == 0
    assert await Idea.filter(owner_id=author.id).count() == 0
    assert await Vote.filter(idea_id=own_idea.id).count() == 0
    assert await Vote.filter(user_id=author.id).count() == 0
    # The other member's idea survives
    assert await Idea.filter(id=other_idea.id).exists()


async def test_remove_missing_user_raises(db):
    with pytest.raises(NotFoundError):
        await IdentityStore([]).remove_user(12345)


async def test_simultaneous_first_logins_share_one_row(db):
    store = IdentityStore([ADMIN_ID])
    profile = ExternalProfile(id="777", display_name="double-tab", avatar_ref=None)

    first, second = await asyncio.gather(
        store.upsert_from_external_profile(profile, False),
        store.upsert_from_external_profile(profile, False),
    )

    assert first.id == second.id
    assert await User.filter(external_id="777").count() == 1
    stored = await User.get(external_id="777")
    assert stored.display_name == "double-tab"
    assert stored.last_login_at is not None
