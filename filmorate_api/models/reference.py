from __future__ import annotations

from .base import CamelModel


class Genre(CamelModel):
    id: int
    name: str | None = None  # в запросах клиент может прислать только id


class MpaRating(CamelModel):
    id: int
    name: str | None = None
