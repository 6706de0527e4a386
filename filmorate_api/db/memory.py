from __future__ import annotations

import itertools
from dataclasses import dataclass, field

from filmorate_api.models.films import Film
from filmorate_api.models.users import User


@dataclass
class MemoryStore:
    """Process-local tables for the in-memory repositories."""

    films: dict[int, Film] = field(default_factory=dict)
    users: dict[int, User] = field(default_factory=dict)
    film_seq: itertools.count = field(
        default_factory=lambda: itertools.count(1))
    user_seq: itertools.count = field(
        default_factory=lambda: itertools.count(1))


_store: MemoryStore | None = None


def get_memory_store() -> MemoryStore:
    global _store
    if _store is None:
        _store = MemoryStore()
    return _store


def reset_memory_store() -> None:
    global _store
    _store = None
