"""Message Routes — view, send and mark read over HTTP.

Invariants verified:
    - send: 201, sender is the caller, unknown recipient is 400 with no row stored
    - view: sender and recipient only; 404 for unknown ids
    - mark read: recipient only; a rejected attempt leaves read_at null;
      repeat calls keep the first read_at
"""

from sqlalchemy import func, select

from messagely.models.message import Message


async def _send(client, headers, to_username="bob", body="hi bob") -> int:
    res = await client.post(
        "/messages", json={"to_username": to_username, "body": body}, headers=headers,
    )
    assert res.status_code == 201, res.text
    return res.json()["message"]["id"]


async def test_send_requires_token(client, bob):
    res = await client.post("/messages", json={"to_username": "bob", "body": "hi"})
    assert res.status_code == 401


async def test_send_uses_caller_as_sender(client, alice, bob):
    res = await client.post(
        "/messages",
        json={"to_username": "bob", "body": "hi bob", "from_username": "bob"},
        headers=alice,
    )
    assert res.status_code == 201
    message = res.json()["message"]
    assert message["from_username"] == "alice"
    assert message["to_username"] == "bob"
    assert message["read_at"] is None
    assert message["sent_at"] is not None


async def test_send_to_unknown_user_is_rejected(client, alice, test_session_factory):
    res = await client.post(
        "/messages", json={"to_username": "ghost", "body": "hello?"}, headers=alice,
    )
    assert res.status_code == 400
    assert res.json()["error"]["kind"] == "referential_violation"
    async with test_session_factory() as db:
        assert await db.scalar(select(func.count()).select_from(Message)) == 0


async def test_send_blank_body_is_400(client, alice, bob):
    res = await client.post(
        "/messages", json={"to_username": "bob", "body": "   "}, headers=alice,
    )
    assert res.status_code == 400


async def test_parties_can_view_message(client, alice, bob):
    message_id = await _send(client, alice)
    for headers in (alice, bob):
        res = await client.get(f"/messages/{message_id}", headers=headers)
        assert res.status_code == 200
        message = res.json()["message"]
        assert message["from_user"]["username"] == "alice"
        assert message["to_user"]["username"] == "bob"
        assert message["body"] == "hi bob"


async def test_third_party_cannot_view_message(client, alice, bob, carol):
    message_id = await _send(client, alice)
    res = await client.get(f"/messages/{message_id}", headers=carol)
    assert res.status_code == 403


async def test_unknown_message_is_404(client, alice):
    res = await client.get("/messages/999", headers=alice)
    assert res.status_code == 404
    assert res.json()["error"]["kind"] == "not_found"


async def test_non_integer_message_id_is_400(client, alice):
    res = await client.get("/messages/abc", headers=alice)
    assert res.status_code == 400


async def test_recipient_marks_read(client, alice, bob):
    message_id = await _send(client, alice)
    res = await client.post(f"/messages/{message_id}/read", headers=bob)
    assert res.status_code == 200
    receipt = res.json()["message"]
    assert receipt["id"] == message_id
    assert receipt["read_at"] is not None


async def test_sender_cannot_mark_read_and_state_is_unchanged(client, alice, bob):
    message_id = await _send(client, alice)
    res = await client.post(f"/messages/{message_id}/read", headers=alice)
    assert res.status_code == 403
    message = (await client.get(f"/messages/{message_id}", headers=alice)).json()["message"]
    assert message["read_at"] is None


async def test_third_party_cannot_mark_read(client, alice, bob, carol):
    message_id = await _send(client, alice)
    res = await client.post(f"/messages/{message_id}/read", headers=carol)
    assert res.status_code == 403


async def test_mark_read_unknown_message_is_404(client, bob):
    res = await client.post("/messages/4242/read", headers=bob)
    assert res.status_code == 404


async def test_out_of_range_message_id_is_404(client, alice, bob):
    huge = 2**63
    view = await client.get(f"/messages/{huge}", headers=alice)
    assert view.status_code == 404
    assert view.json()["error"]["kind"] == "not_found"
    read = await client.post(f"/messages/{huge}/read", headers=bob)
    assert read.status_code == 404
    assert read.json()["error"]["kind"] == "not_found"


async def test_mark_read_twice_keeps_first_timestamp(client, alice, bob):
    message_id = await _send(client, alice)
    first = (await client.post(f"/messages/{message_id}/read", headers=bob)).json()
    second = await client.post(f"/messages/{message_id}/read", headers=bob)
    assert second.status_code == 200
    assert second.json()["message"]["read_at"] == first["message"]["read_at"]
