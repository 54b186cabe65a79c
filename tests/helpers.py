"""Shared request helpers for API tests."""


async def register(client, email="player@example.com", password="secret_pw_1"):
    """Register a user and return (token, user) from the response."""
    r = await client.post("/api/register", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    body = r.json()
    return body["token"], body["user"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


HISTORY_BODY = {
    "mode": "A",
    "topDigitsMode": 1,
    "historyTop": [1, 2, 3],
    "historyBottom": [4, 5],
    "useLastN": 10,
    "weightMode": "linear",
    "summary": "top: 123",
}
