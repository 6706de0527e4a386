"""Seed Postgres with random users, films, likes and friendships."""

from __future__ import annotations

import os
import random
import time
from datetime import date, timedelta

import psycopg

from filmorate_api.core.config import settings
from filmorate_api.services.repositories.reference_repo import (
    GENRES,
    MPA_RATINGS,
)

USERS = int(os.getenv("USERS", "200"))
FILMS = int(os.getenv("FILMS", "100"))
LIKES_PER_USER = int(os.getenv("LIKES_PER_USER", "5"))
FRIENDS_PER_USER = int(os.getenv("FRIENDS_PER_USER", "3"))


def random_date(start: date, end: date) -> date:
    return start + timedelta(days=random.randint(0, (end - start).days))


def insert_users(conn: psycopg.Connection) -> list[int]:
    ids = []
    tag = int(time.time())
    with conn.cursor() as cur:
        for n in range(USERS):
            login = f"user{tag}_{n}"
            cur.execute(
                "INSERT INTO users (email, login, name, birthday)"
                " VALUES (%s, %s, %s, %s) RETURNING user_id",
                (f"{login}@example.com", login, login,
                 random_date(date(1960, 1, 1), date(2010, 1, 1))),
            )
            ids.append(cur.fetchone()[0])
    return ids


def insert_films(conn: psycopg.Connection) -> list[int]:
    ids = []
    with conn.cursor() as cur:
        for n in range(FILMS):
            cur.execute(
                "INSERT INTO films"
                " (name, description, release_date, duration, mpa_id)"
                " VALUES (%s, %s, %s, %s, %s) RETURNING film_id",
                (f"Film #{n}", "demo",
                 random_date(date(1950, 1, 1), date(2024, 1, 1)),
                 random.randint(60, 200),
                 random.choice(MPA_RATINGS).id),
            )
            film_id = cur.fetchone()[0]
            ids.append(film_id)
            genres = random.sample(GENRES, k=random.randint(0, 2))
            cur.executemany(
                "INSERT INTO film_genre (film_id, genre_id) VALUES (%s, %s)",
                [(film_id, g.id) for g in genres],
            )
    return ids


def main() -> None:
    t0 = time.time()
    with psycopg.connect(settings.pg_dsn) as conn:
        users = insert_users(conn)
        films = insert_films(conn)
        likes = {
            (film_id, user_id)
            for user_id in users
            for film_id in random.sample(films, k=min(LIKES_PER_USER,
                                                      len(films)))
        }
        edges = {
            (user_id, friend_id)
            for user_id in users
            for friend_id in random.sample(users, k=min(FRIENDS_PER_USER,
                                                        len(users)))
            if friend_id != user_id
        }
        with conn.cursor() as cur:
            cur.executemany(
                "INSERT INTO film_likes (film_id, user_id) VALUES (%s, %s)",
                sorted(likes),
            )
            cur.executemany(
                "INSERT INTO friends (user_id, followed_user_id, status)"
                " VALUES (%s, %s, 'UNCONFIRMED')",
                sorted(edges),
            )
        conn.commit()

    dt = time.time() - t0
    print(f"[pg] users={len(users)} films={len(films)} likes={len(likes)}"
          f" friendships={len(edges)} in {dt:.1f}s")


if __name__ == "__main__":
    main()
