"""Messaging Scenario — alice and bob end to end.

register alice/bob → alice messages bob → bob sees it unread → alice cannot
mark it read → bob marks it read → alice sees read_at set.
"""


async def test_alice_and_bob_conversation(client):
    alice = await client.post("/auth/register", json={
        "username": "alice", "password": "alice-pw",
        "first_name": "Alice", "last_name": "Liddell", "phone": "555-0101",
    })
    bob = await client.post("/auth/register", json={
        "username": "bob", "password": "bob-pw",
        "first_name": "Bob", "last_name": "Builder", "phone": "555-0102",
    })
    alice_h = {"Authorization": f"Bearer {alice.json()['token']}"}
    bob_h = {"Authorization": f"Bearer {bob.json()['token']}"}

    sent = await client.post(
        "/messages", json={"to_username": "bob", "body": "tea at four?"}, headers=alice_h,
    )
    message_id = sent.json()["message"]["id"]

    inbox = (await client.get("/users/bob/to", headers=bob_h)).json()["messages"]
    assert [(m["id"], m["read_at"]) for m in inbox] == [(message_id, None)]

    denied = await client.post(f"/messages/{message_id}/read", headers=alice_h)
    assert denied.status_code == 403

    marked = await client.post(f"/messages/{message_id}/read", headers=bob_h)
    assert marked.status_code == 200

    seen = (await client.get(f"/messages/{message_id}", headers=alice_h)).json()["message"]
    assert seen["read_at"] == marked.json()["message"]["read_at"]
