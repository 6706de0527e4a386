"""Friendship graph: directed edges with UNCONFIRMED/CONFIRMED status."""

from __future__ import annotations

from tests.helpers import assert_error, create_user


async def friend_ids(client, user_id: int) -> list[int]:
    r = await client.get(f"/users/{user_id}/friends")
    assert r.status_code == 200
    return [u["id"] for u in r.json()]


async def edges(client, user_id: int) -> list[dict]:
    return (await client.get(f"/users/{user_id}")).json()["friends"]


async def test_add_friend_creates_one_directional_unconfirmed_edge(client):
    a, b = await create_user(client), await create_user(client)

    r = await client.put(f"/users/{a['id']}/friends/{b['id']}")
    assert r.status_code == 200

    assert await friend_ids(client, a["id"]) == [b["id"]]
    assert await friend_ids(client, b["id"]) == []
    assert await edges(client, a["id"]) == [
        {"friendId": b["id"], "status": "UNCONFIRMED"}]


async def test_reciprocal_request_confirms_both_edges(client):
    a, b = await create_user(client), await create_user(client)
    await client.put(f"/users/{a['id']}/friends/{b['id']}")
    await client.put(f"/users/{b['id']}/friends/{a['id']}")

    assert await edges(client, a["id"]) == [
        {"friendId": b["id"], "status": "CONFIRMED"}]
    assert await edges(client, b["id"]) == [
        {"friendId": a["id"], "status": "CONFIRMED"}]


async def test_adding_existing_friend_is_validation_error(client):
    a, b = await create_user(client), await create_user(client)
    await client.put(f"/users/{a['id']}/friends/{b['id']}")

    r = await client.put(f"/users/{a['id']}/friends/{b['id']}")
    assert_error(r, 400, "Validation error")


async def test_self_friendship_is_rejected(client):
    a = await create_user(client)
    r = await client.put(f"/users/{a['id']}/friends/{a['id']}")
    assert_error(r, 400, "Validation error")


async def test_friend_operations_with_missing_user_return_404(client):
    a = await create_user(client)
    for call, path in [
        (client.put, f"/users/{a['id']}/friends/999"),
        (client.put, f"/users/999/friends/{a['id']}"),
        (client.delete, f"/users/{a['id']}/friends/999"),
        (client.get, "/users/999/friends"),
        (client.get, f"/users/{a['id']}/friends/common/999"),
    ]:
        assert_error(await call(path), 404, "Not found")


async def test_remove_friend_removes_only_that_edge(client):
    a, b, c = [await create_user(client) for _ in range(3)]
    await client.put(f"/users/{a['id']}/friends/{b['id']}")
    await client.put(f"/users/{a['id']}/friends/{c['id']}")
    await client.put(f"/users/{b['id']}/friends/{a['id']}")

    r = await client.delete(f"/users/{a['id']}/friends/{b['id']}")
    assert r.status_code == 200

    assert await friend_ids(client, a["id"]) == [c["id"]]
    # встречное ребро осталось, но стало неподтверждённым
    assert await edges(client, b["id"]) == [
        {"friendId": a["id"], "status": "UNCONFIRMED"}]


async def test_remove_absent_friend_is_noop(client):
    a, b = await create_user(client), await create_user(client)
    r = await client.delete(f"/users/{a['id']}/friends/{b['id']}")
    assert r.status_code == 200
    assert await friend_ids(client, a["id"]) == []


async def test_common_friends_is_intersection(client):
    a, b, c, d, e = [await create_user(client) for _ in range(5)]
    for friend in (c, d, e):
        await client.put(f"/users/{a['id']}/friends/{friend['id']}")
    for friend in (d, e):
        await client.put(f"/users/{b['id']}/friends/{friend['id']}")
    await client.put(f"/users/{b['id']}/friends/{a['id']}")

    r = await client.get(f"/users/{a['id']}/friends/common/{b['id']}")
    assert r.status_code == 200
    common = [u["id"] for u in r.json()]
    assert common == [d["id"], e["id"]]

    expected = (set(await friend_ids(client, a["id"]))
                & set(await friend_ids(client, b["id"])))
    assert set(common) == expected


async def test_common_friends_empty_when_disjoint(client):
    a, b, c = [await create_user(client) for _ in range(3)]
    await client.put(f"/users/{a['id']}/friends/{c['id']}")

    r = await client.get(f"/users/{a['id']}/friends/common/{b['id']}")
    assert r.status_code == 200 and r.json() == []


async def test_deleting_user_drops_edges_in_both_directions(client):
    a, b, c = [await create_user(client) for _ in range(3)]
    await client.put(f"/users/{a['id']}/friends/{b['id']}")
    await client.put(f"/users/{b['id']}/friends/{c['id']}")

    assert (await client.delete(f"/users/{b['id']}")).status_code == 200

    assert await friend_ids(client, a["id"]) == []
    assert_error(await client.get(f"/users/{b['id']}/friends"),
                 404, "Not found")
