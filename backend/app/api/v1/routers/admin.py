# app/api/v1/routers/admin.py
from fastapi import APIRouter, Depends

from app.api.v1.deps import get_identity_store, require_admin
from app.core.errors import ValidationError
from app.models.user import User
from app.schemas.admin import AdminUserListOut
from app.services.discord import avatar_url
from app.services.identity import IdentityStore

router = APIRouter(prefix="/admin", tags=["admin"])


# ==============================================================================
# Member Management Interface
#     Prefix: /api/v1/admin/users
# ==============================================================================
def _user_to_dict(u: User) -> dict:
    """
    Convert User model instance to dictionary format for admin responses.
    """
    return {
        "id": u.id,
        "external_id": u.external_id,
        "username": u.display_name,
        "avatar_url": avatar_url(u.external_id, u.avatar_ref),
        "is_admin": u.is_admin,
        "created_at": u.created_at.isoformat() if u.created_at else None,
        "last_login_at": u.last_login_at.isoformat() if u.last_login_at else None,
    }


@router.get(
    "/users",
    response_model=AdminUserListOut,
    dependencies=[Depends(require_admin)],
)
async def list_users(store: IdentityStore = Depends(get_identity_store)):
    """
    List every member, newest first (admin only).

    Raises:
        ForbiddenError (403): If user is not an admin
        AuthRequiredError (401): If user is not authenticated
    """
    rows = await store.list_users()
    return {"items": [_user_to_dict(u) for u in rows], "total": len(rows)}


@router.delete("/users/{user_id}", response_model=dict)
async def delete_user(
    user_id: int,
    current_admin: User = Depends(require_admin),
    store: IdentityStore = Depends(get_identity_store),
):
    """
    Remove a member together with their ideas and votes (admin only).

    Admins cannot remove themselves. A removed member who signs in again
    comes back as a fresh account.

    Raises:
        ValidationError (400): If the admin tries to remove themselves
        NotFoundError (404): If user not found
        ForbiddenError (403): If user is not an admin
        AuthRequiredError (401): If user is not authenticated
    """
    if current_admin.id == user_id:
        raise ValidationError("Cannot delete yourself")
    await store.remove_user(user_id)
    return {"success": True, "data": {"id": user_id, "deleted": True}}
