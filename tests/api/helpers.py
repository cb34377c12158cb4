"""Shared API test helpers."""


async def register(client, username: str, password: str = "pw-123456") -> dict:
    """Register a user through the API; returns the bearer header."""
    res = await client.post("/auth/register", json={
        "username": username,
        "password": password,
        "first_name": username.title(),
        "last_name": "Tester",
        "phone": "555-0100",
    })
    assert res.status_code == 201, res.text
    return {"Authorization": f"Bearer {res.json()['token']}"}
