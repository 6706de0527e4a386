from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import Field

from .base import CamelModel


class FriendshipStatus(str, Enum):
    unconfirmed = "UNCONFIRMED"
    confirmed = "CONFIRMED"


class Friendship(CamelModel):
    """Outgoing edge: the owner follows ``friend_id``."""

    friend_id: int
    status: FriendshipStatus = FriendshipStatus.unconfirmed


class User(CamelModel):
    id: int | None = None
    email: str | None = None
    login: str | None = None
    name: str | None = None
    birthday: date | None = None
    friends: list[Friendship] = Field(default_factory=list)

    def friend_ids(self) -> list[int]:
        return [edge.friend_id for edge in self.friends]

    def edge_to(self, friend_id: int) -> Friendship | None:
        for edge in self.friends:
            if edge.friend_id == friend_id:
                return edge
        return None
