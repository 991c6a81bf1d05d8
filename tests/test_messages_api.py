import pytest
from sqlalchemy import select

from medlink.models.message import Message
from conftest import auth_header, connect_users, register_user


async def _send(client, sender, receiver, content):
    return await client.post(
        "/messages",
        json={"receiverId": receiver["user"]["id"], "content": content},
        headers=auth_header(sender["token"]),
    )


@pytest.mark.asyncio
async def test_messaging_requires_accepted_connection(client):
    a = await register_user(client, "ma@example.com")
    b = await register_user(client, "mb@example.com")

    assert (await _send(client, a, b, "hi")).status_code == 403
    response = await client.get(f"/messages/{b['user']['id']}", headers=auth_header(a["token"]))
    assert response.status_code == 403

    # a pending request is not enough
    await client.post("/connections/requests", json={"receiverId": b["user"]["id"]}, headers=auth_header(a["token"]))
    assert (await _send(client, a, b, "hi")).status_code == 403


@pytest.mark.asyncio
async def test_cannot_message_self_or_send_empty(client):
    a = await register_user(client, "selfmsg@example.com")
    assert (await _send(client, a, a, "hi")).status_code == 400
    b = await register_user(client, "emptymsg@example.com")
    await connect_users(client, a, b)
    assert (await _send(client, a, b, "")).status_code == 422


@pytest.mark.asyncio
async def test_send_message(client):
    a = await register_user(client, "sa@example.com", firstName="Alice")
    b = await register_user(client, "sb@example.com")
    await connect_users(client, a, b)

    response = await _send(client, a, b, "hello")
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"]["content"] == "hello"
    assert body["message"]["isRead"] is False
    assert body["message"]["sender"]["firstName"] == "Alice"


@pytest.mark.asyncio
async def test_get_messages_pagination_and_order(client):
    a = await register_user(client, "pa@example.com")
    b = await register_user(client, "pb@example.com")
    # b requested, a accepted: either direction counts
    await connect_users(client, b, a)

    t1 = (await _send(client, a, b, "t1")).json()["message"]
    t2 = (await _send(client, b, a, "t2")).json()["message"]
    t3 = (await _send(client, a, b, "t3")).json()["message"]

    page = (await client.get(
        f"/messages/{b['user']['id']}", params={"limit": 2}, headers=auth_header(a["token"])
    )).json()
    assert [m["id"] for m in page["messages"]] == [t2["id"], t3["id"]]
    assert page["nextCursor"] == t1["id"]

    older = (await client.get(
        f"/messages/{b['user']['id']}",
        params={"limit": 2, "cursor": page["nextCursor"]},
        headers=auth_header(a["token"]),
    )).json()
    assert [m["id"] for m in older["messages"]] == [t1["id"]]
    assert older["nextCursor"] is None


@pytest.mark.asyncio
async def test_viewing_marks_incoming_as_read(client, db_session):
    a = await register_user(client, "ra@example.com")
    b = await register_user(client, "rb@example.com")
    await connect_users(client, a, b)

    to_b = (await _send(client, a, b, "for b")).json()["message"]
    to_a = (await _send(client, b, a, "for a")).json()["message"]

    response = await client.get(f"/messages/{a['user']['id']}", headers=auth_header(b["token"]))
    assert response.status_code == 200

    rows = {m.id: m for m in (await db_session.execute(select(Message))).scalars().all()}
    assert rows[to_b["id"]].is_read is True
    # messages sent by the viewer stay unread
    assert rows[to_a["id"]].is_read is False


@pytest.mark.asyncio
async def test_get_messages_limit_bounds(client):
    a = await register_user(client, "la@example.com")
    b = await register_user(client, "lb@example.com")
    await connect_users(client, a, b)
    url = f"/messages/{b['user']['id']}"
    assert (await client.get(url, params={"limit": 101}, headers=auth_header(a["token"]))).status_code == 422
    response = await client.get(url, headers=auth_header(a["token"]))
    assert response.json() == {"messages": [], "nextCursor": None}
