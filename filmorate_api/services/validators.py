"""Field checks run before persistence.

Each function raises ``ValidationError`` on the first violated rule,
so the client always gets exactly one message.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import NoReturn

from filmorate_api.core.exceptions import ValidationError
from filmorate_api.models.films import Film
from filmorate_api.models.users import User

log = logging.getLogger(__name__)

CINEMA_BIRTHDAY = date(1895, 12, 28)
MAX_DESCRIPTION_LENGTH = 200
# films.duration is a Postgres INTEGER
MAX_DURATION = 2_147_483_647


def _fail(entity: str, field: str, message: str) -> NoReturn:
    log.warning("validation_failed",
                extra={"entity": entity, "field": field, "reason": message})
    raise ValidationError(message)


def validate_film(film: Film) -> None:
    if film.name is None or not film.name.strip():
        _fail("film", "name", "Film name must not be blank")
    if (film.description is not None
            and len(film.description) > MAX_DESCRIPTION_LENGTH):
        _fail("film", "description",
              f"Film description must not exceed "
              f"{MAX_DESCRIPTION_LENGTH} characters")
    if film.release_date is None or film.release_date < CINEMA_BIRTHDAY:
        _fail("film", "releaseDate",
              "Film release date must not be earlier than 1895-12-28")
    if film.duration is None or film.duration <= 0:
        _fail("film", "duration", "Film duration must be a positive number")
    if film.duration > MAX_DURATION:
        _fail("film", "duration",
              f"Film duration must not exceed {MAX_DURATION} minutes")
    if film.mpa is None:
        _fail("film", "mpa", "Film MPA rating must be specified")


def validate_user(user: User, today: date | None = None) -> None:
    today = today or date.today()
    if user.email is None or not user.email.strip():
        _fail("user", "email", "User email must not be blank")
    if "@" not in user.email:
        _fail("user", "email", "User email must contain @")
    if user.login is None or not user.login.strip():
        _fail("user", "login", "User login must not be blank")
    if any(ch.isspace() for ch in user.login):
        _fail("user", "login", "User login must not contain whitespace")
    if user.birthday is None or user.birthday > today:
        _fail("user", "birthday", "User birthday must not be in the future")


def default_user_name(user: User) -> User:
    """Blank or missing display name falls back to login."""
    if user.name is None or not user.name.strip():
        user.name = user.login
    return user
