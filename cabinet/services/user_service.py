from typing import List
import logging

from fastapi import HTTPException, status

from ..core.security import UserRole
from ..repositories.base import DataStore
from ..schemas.user import Profile, UserCreate

logger = logging.getLogger(__name__)


class UserService:
    """Account administration. Callers are already checked as administrators."""

    def __init__(self, store: DataStore):
        self.store = store

    def list_users(self, search: str = "") -> List[Profile]:
        profiles = self.store.profiles()
        needle = search.strip().lower()
        if needle:
            profiles = [
                p for p in profiles
                if needle in p.full_name.lower() or needle in p.username.lower()
            ]
        return profiles

    def create_user(self, user_data: UserCreate) -> Profile:
        if self.store.users.find(username=user_data.username):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username already registered"
            )

        account = self.store.users.create(user_data.model_dump())
        logger.info(f"User '{account.username}' created with role {account.role.value}")
        return account.to_profile()

    def delete_user(self, user_id: str) -> None:
        account = self.store.users.get(user_id)
        if not account:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )

        # Administrators are never removed through the API
        if account.role == UserRole.ADMIN:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Administrator accounts cannot be deleted"
            )

        self.store.users.delete(user_id)
        logger.info(f"User '{account.username}' deleted")

    def reset_password(self, user_id: str, new_password: str) -> None:
        if not self.store.users.update(user_id, password=new_password):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )
        logger.info(f"Password reset for user {user_id}")
