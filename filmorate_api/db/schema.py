"""DDL and reference seed for the relational store."""

from __future__ import annotations

import logging

from psycopg_pool import AsyncConnectionPool

from filmorate_api.services.repositories.reference_repo import (
    GENRES,
    MPA_RATINGS,
)

log = logging.getLogger(__name__)

DDL = """
CREATE TABLE IF NOT EXISTS mpa_ratings (
  mpa_id      INTEGER PRIMARY KEY,
  mpa_rating  VARCHAR(10) NOT NULL UNIQUE
);
CREATE TABLE IF NOT EXISTS genres (
  genre_id    INTEGER PRIMARY KEY,
  genre_name  VARCHAR(50) NOT NULL UNIQUE
);
CREATE TABLE IF NOT EXISTS films (
  film_id       BIGSERIAL PRIMARY KEY,
  name          TEXT NOT NULL,
  description   VARCHAR(200),
  release_date  DATE NOT NULL,
  duration      INTEGER NOT NULL CHECK (duration > 0),
  mpa_id        INTEGER NOT NULL REFERENCES mpa_ratings (mpa_id)
);
CREATE TABLE IF NOT EXISTS users (
  user_id   BIGSERIAL PRIMARY KEY,
  email     TEXT NOT NULL UNIQUE,
  login     TEXT NOT NULL,
  name      TEXT,
  birthday  DATE NOT NULL
);
CREATE TABLE IF NOT EXISTS film_genre (
  film_id   BIGINT NOT NULL REFERENCES films (film_id) ON DELETE CASCADE,
  genre_id  INTEGER NOT NULL REFERENCES genres (genre_id),
  PRIMARY KEY (film_id, genre_id)
);
CREATE TABLE IF NOT EXISTS film_likes (
  film_id  BIGINT NOT NULL REFERENCES films (film_id) ON DELETE CASCADE,
  user_id  BIGINT NOT NULL REFERENCES users (user_id) ON DELETE CASCADE,
  PRIMARY KEY (film_id, user_id)
);
CREATE INDEX IF NOT EXISTS idx_film_likes_user ON film_likes (user_id);
CREATE TABLE IF NOT EXISTS friends (
  user_id           BIGINT NOT NULL REFERENCES users (user_id) ON DELETE CASCADE,
  followed_user_id  BIGINT NOT NULL REFERENCES users (user_id) ON DELETE CASCADE,
  status            VARCHAR(20) NOT NULL
                    CHECK (status IN ('UNCONFIRMED', 'CONFIRMED')),
  PRIMARY KEY (user_id, followed_user_id),
  CHECK (user_id <> followed_user_id)
);
CREATE INDEX IF NOT EXISTS idx_friends_followed ON friends (followed_user_id);
"""

SEED_MPA = """
INSERT INTO mpa_ratings (mpa_id, mpa_rating) VALUES (%s, %s)
ON CONFLICT (mpa_id) DO NOTHING
"""
SEED_GENRES = """
INSERT INTO genres (genre_id, genre_name) VALUES (%s, %s)
ON CONFLICT (genre_id) DO NOTHING
"""


async def init_schema(pool: AsyncConnectionPool) -> None:
    """Create tables if missing and seed the genre/MPA tables."""
    async with pool.connection() as conn:
        await conn.execute(DDL)
        async with conn.cursor() as cur:
            await cur.executemany(
                SEED_MPA, [(m.id, m.name) for m in MPA_RATINGS])
            await cur.executemany(
                SEED_GENRES, [(g.id, g.name) for g in GENRES])
    log.info("schema_ready",
             extra={"genres": len(GENRES), "mpa": len(MPA_RATINGS)})


async def drop_schema(pool: AsyncConnectionPool) -> None:
    async with pool.connection() as conn:
        await conn.execute(
            "DROP TABLE IF EXISTS friends, film_likes, film_genre,"
            " users, films, genres, mpa_ratings CASCADE")
