import itertools
from typing import Any, Dict

from httpx import AsyncClient

_seq = itertools.count(1)


def film_payload(**overrides: Any) -> Dict[str, Any]:
    body = {
        "name": "Arrival",
        "description": "Linguist meets heptapods",
        "releaseDate": "2016-11-10",
        "duration": 116,
        "mpa": {"id": 3},
        "genres": [{"id": 2}],
    }
    body.update(overrides)
    return body


def user_payload(**overrides: Any) -> Dict[str, Any]:
    n = next(_seq)
    body = {
        "email": f"user{n}@example.com",
        "login": f"user{n}",
        "name": f"User {n}",
        "birthday": "1990-05-17",
    }
    body.update(overrides)
    return body


async def create_film(client: AsyncClient, **overrides: Any) -> dict:
    r = await client.post("/films", json=film_payload(**overrides))
    assert r.status_code == 200, r.text
    return r.json()


async def create_user(client: AsyncClient, **overrides: Any) -> dict:
    r = await client.post("/users", json=user_payload(**overrides))
    assert r.status_code == 200, r.text
    return r.json()


def assert_error(r, status: int, category: str) -> dict:
    assert r.status_code == status, r.text
    body = r.json()
    assert body["error"] == category
    assert body["message"]
    return body
