from __future__ import annotations

from datetime import date

from pydantic import Field, field_serializer

from .base import CamelModel
from .reference import Genre, MpaRating


class Film(CamelModel):
    id: int | None = None
    name: str | None = None
    description: str | None = None
    release_date: date | None = None
    duration: int | None = None
    likes: set[int] = Field(default_factory=set)
    genres: list[Genre] | None = Field(default_factory=list)
    mpa: MpaRating | None = None

    @field_serializer("likes")
    def _sorted_likes(self, likes: set[int]) -> list[int]:
        return sorted(likes)
