from fastapi import APIRouter, Depends, status
from typing import List

from ...api.deps import get_store, require_permission, require_view
from ...core.policy import Action, Resource
from ...repositories.base import DataStore
from ...schemas.user import PasswordUpdate, Profile, UserCreate
from ...services.user_service import UserService

# Admin routes
router = APIRouter(
    prefix="/admin/users",
    tags=["Administration"],
    dependencies=[Depends(require_view(Resource.USERS))],
)


@router.get("", response_model=List[Profile])
async def list_users(
    search: str = "",
    store: DataStore = Depends(get_store)
):
    """List all accounts (admin only)."""
    return UserService(store).list_users(search)


@router.post(
    "",
    response_model=Profile,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Action.CREATE, Resource.USERS))],
)
async def create_user(
    user_data: UserCreate,
    store: DataStore = Depends(get_store)
):
    """Create an account (admin only)."""
    return UserService(store).create_user(user_data)


@router.delete(
    "/{user_id}",
    dependencies=[Depends(require_permission(Action.DELETE, Resource.USERS))],
)
async def delete_user(
    user_id: str,
    store: DataStore = Depends(get_store)
):
    """Delete a non-administrator account (admin only)."""
    UserService(store).delete_user(user_id)
    return {"message": "User deleted successfully"}


@router.post(
    "/{user_id}/password",
    dependencies=[Depends(require_permission(Action.RESET_PASSWORD, Resource.USERS))],
)
async def reset_password(
    user_id: str,
    password_data: PasswordUpdate,
    store: DataStore = Depends(get_store)
):
    """Set a new password for an account (admin only)."""
    UserService(store).reset_password(user_id, password_data.new_password)
    return {"message": "Password reset successfully"}
