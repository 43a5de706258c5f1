import pytest
from httpx import AsyncClient


async def open_conversation(client: AsyncClient, headers: dict, user_id: int) -> dict:
    response = await client.post("/api/v1/conversations", json={"user_id": user_id}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


async def send(client: AsyncClient, conversation_id: int, headers: dict, content: str):
    return await client.post(
        f"/api/v1/conversations/{conversation_id}/messages",
        json={"content": content},
        headers=headers
    )


@pytest.mark.asyncio
async def test_conversation_is_shared_by_the_pair(
    client: AsyncClient, test_user, other_user, auth_headers, other_headers
):
    mine = await open_conversation(client, auth_headers, other_user.id)
    theirs = await open_conversation(client, other_headers, test_user.id)

    assert mine["id"] == theirs["id"]
    assert mine["user1_id"] < mine["user2_id"]
    assert mine["other_user"]["id"] == other_user.id
    assert theirs["other_user"]["id"] == test_user.id


@pytest.mark.asyncio
async def test_cannot_message_yourself(client: AsyncClient, test_user, auth_headers):
    response = await client.post("/api/v1/conversations", json={"user_id": test_user.id}, headers=auth_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_conversation_with_unknown_user(client: AsyncClient, auth_headers):
    response = await client.post("/api/v1/conversations", json={"user_id": 123456}, headers=auth_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_send_and_read_messages(client: AsyncClient, other_user, test_user, auth_headers, other_headers):
    conversation = await open_conversation(client, auth_headers, other_user.id)

    first = await send(client, conversation["id"], auth_headers, "  Nets at 6?  ")
    second = await send(client, conversation["id"], other_headers, "See you there")

    assert first.status_code == 201
    assert first.json()["content"] == "Nets at 6?"
    assert first.json()["sender"]["id"] == test_user.id

    response = await client.get(f"/api/v1/conversations/{conversation['id']}/messages", headers=other_headers)
    assert [message["id"] for message in response.json()] == [first.json()["id"], second.json()["id"]]

    listing = await client.get("/api/v1/conversations", headers=auth_headers)
    assert listing.json()[0]["last_message"]["content"] == "See you there"


@pytest.mark.asyncio
async def test_empty_message_rejected(client: AsyncClient, other_user, auth_headers):
    conversation = await open_conversation(client, auth_headers, other_user.id)

    response = await send(client, conversation["id"], auth_headers, "   ")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_outsider_cannot_see_conversation(
    client: AsyncClient, other_user, auth_headers, make_user, headers_for
):
    conversation = await open_conversation(client, auth_headers, other_user.id)
    outsider = headers_for(await make_user())

    messages = await client.get(f"/api/v1/conversations/{conversation['id']}/messages", headers=outsider)
    posted = await send(client, conversation["id"], outsider, "hi")
    deleted = await client.delete(f"/api/v1/conversations/{conversation['id']}", headers=outsider)

    assert messages.status_code == 404
    assert posted.status_code == 404
    assert deleted.status_code == 404


@pytest.mark.asyncio
async def test_unread_count_and_mark_read(client: AsyncClient, other_user, auth_headers, other_headers):
    conversation = await open_conversation(client, auth_headers, other_user.id)
    await send(client, conversation["id"], auth_headers, "Are you in the squad?")

    sender_count = await client.get("/api/v1/conversations/unread-count", headers=auth_headers)
    receiver_count = await client.get("/api/v1/conversations/unread-count", headers=other_headers)
    assert sender_count.json() == {"count": 0}
    assert receiver_count.json() == {"count": 1}

    listing = await client.get("/api/v1/conversations", headers=other_headers)
    assert listing.json()[0]["has_unread"] is True

    response = await client.put(f"/api/v1/conversations/{conversation['id']}/read", headers=other_headers)
    assert response.status_code == 200

    after = await client.get("/api/v1/conversations/unread-count", headers=other_headers)
    assert after.json() == {"count": 0}

    messages = await client.get(f"/api/v1/conversations/{conversation['id']}/messages", headers=other_headers)
    assert all(message["is_read"] for message in messages.json())


@pytest.mark.asyncio
async def test_conversations_ordered_by_activity(client: AsyncClient, make_user, other_user, auth_headers):
    third = await make_user()
    older = await open_conversation(client, auth_headers, other_user.id)
    newer = await open_conversation(client, auth_headers, third.id)
    await send(client, older["id"], auth_headers, "bump")

    listing = await client.get("/api/v1/conversations", headers=auth_headers)

    assert [item["id"] for item in listing.json()] == [older["id"], newer["id"]]


@pytest.mark.asyncio
async def test_delete_conversation(client: AsyncClient, other_user, auth_headers, other_headers):
    conversation = await open_conversation(client, auth_headers, other_user.id)
    await send(client, conversation["id"], auth_headers, "bye")

    response = await client.delete(f"/api/v1/conversations/{conversation['id']}", headers=other_headers)

    assert response.status_code == 200
    assert (await client.get("/api/v1/conversations", headers=auth_headers)).json() == []
    gone = await client.get(f"/api/v1/conversations/{conversation['id']}/messages", headers=auth_headers)
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_listing_names_the_other_participant(
    client: AsyncClient, test_user, other_user, auth_headers, other_headers
):
    conversation = await open_conversation(client, other_headers, test_user.id)
    await send(client, conversation["id"], other_headers, "Trials on Sunday")

    mine = (await client.get("/api/v1/conversations", headers=auth_headers)).json()
    theirs = (await client.get("/api/v1/conversations", headers=other_headers)).json()

    assert [item["other_user"]["id"] for item in mine] == [other_user.id]
    assert [item["other_user"]["id"] for item in theirs] == [test_user.id]
    assert mine[0]["has_unread"] is True
    assert theirs[0]["has_unread"] is False
