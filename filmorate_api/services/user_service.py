"""Service layer for users and the friendship graph.

Friendship is a directed edge with a status. ``add_friend(a, b)`` creates
an UNCONFIRMED edge a -> b; when b -> a already exists both edges become
CONFIRMED. ``get_friends`` follows outgoing edges only.
"""

from __future__ import annotations

import logging

from filmorate_api.core.exceptions import (
    DuplicatedDataError,
    NotFoundError,
    ValidationError,
)
from filmorate_api.models.users import FriendshipStatus, User
from filmorate_api.services.validators import default_user_name, validate_user
from .repositories.base import UsersRepo

log = logging.getLogger(__name__)

# поля, которые PUT /users может перезаписать
UPDATABLE_FIELDS = frozenset({"email", "login", "name", "birthday"})


class UserService:
    def __init__(self, users: UsersRepo) -> None:
        self.users = users

    # ----- READ -----

    async def list_users(self) -> list[User]:
        return await self.users.find_all()

    async def get_user(self, user_id: int) -> User:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User with id {user_id} not found")
        return user

    # ----- WRITE -----

    async def create_user(self, user: User) -> User:
        validate_user(user)
        if await self.users.exists_by_email(user.email):
            log.warning("email_taken", extra={"email": user.email})
            raise DuplicatedDataError(f"Email {user.email} is already in use")
        default_user_name(user)
        # связи дружбы создаются только через /friends
        user = user.model_copy(update={"id": None, "friends": []})
        return await self.users.create(user)

    async def update_user(self, user: User) -> User:
        """Partial overwrite: fields absent from the body keep stored values."""
        if user.id is None:
            raise ValidationError("User id must be specified")
        existing = await self.get_user(user.id)
        changes = {
            name: getattr(user, name)
            for name in user.model_fields_set & UPDATABLE_FIELDS
        }
        merged = existing.model_copy(update=changes)
        validate_user(merged)
        if (merged.email != existing.email
                and await self.users.exists_by_email(merged.email)):
            log.warning("email_taken", extra={"email": merged.email})
            raise DuplicatedDataError(
                f"Email {merged.email} is already in use")
        default_user_name(merged)
        return await self.users.update(merged)

    async def delete_user(self, user_id: int) -> None:
        await self.users.delete(user_id)

    # ----- FRIENDS -----

    async def add_friend(self, user_id: int, friend_id: int) -> None:
        user = await self.get_user(user_id)
        friend = await self.get_user(friend_id)
        if user_id == friend_id:
            raise ValidationError("User cannot add themselves as a friend")
        if user.edge_to(friend_id) is not None:
            raise ValidationError(
                f"User with id {friend_id} is already a friend")

        if friend.edge_to(user_id) is None:
            await self.users.save_friendship(
                user_id, friend_id, FriendshipStatus.unconfirmed)
        else:
            # встречная заявка уже есть: дружба взаимная
            await self.users.save_friendship(
                user_id, friend_id, FriendshipStatus.confirmed)
            await self.users.save_friendship(
                friend_id, user_id, FriendshipStatus.confirmed)
        log.info("friend_added",
                 extra={"user_id": user_id, "friend_id": friend_id})

    async def remove_friend(self, user_id: int, friend_id: int) -> None:
        await self.get_user(user_id)
        friend = await self.get_user(friend_id)
        removed = await self.users.remove_friendship(user_id, friend_id)
        reverse = friend.edge_to(user_id)
        if (removed and reverse is not None
                and reverse.status is FriendshipStatus.confirmed):
            await self.users.save_friendship(
                friend_id, user_id, FriendshipStatus.unconfirmed)
        log.info("friend_removed",
                 extra={"user_id": user_id, "friend_id": friend_id,
                        "existed": removed})

    async def get_friends(self, user_id: int) -> list[User]:
        user = await self.get_user(user_id)
        return [await self.get_user(friend_id)
                for friend_id in user.friend_ids()]

    async def get_common_friends(
        self,
        user_id: int,
        other_id: int,
    ) -> list[User]:
        user = await self.get_user(user_id)
        other = await self.get_user(other_id)
        other_ids = set(other.friend_ids())
        return [await self.get_user(friend_id)
                for friend_id in user.friend_ids()
                if friend_id in other_ids]
