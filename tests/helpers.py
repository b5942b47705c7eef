"""Helper utilities for tests."""

import base64
import json

TEST_SECRET = "test-secret-that-is-long-enough-for-hs256"


def register(client, email="alice@example.com", name="Alice", password="secret123"):
    """Register through the API.

    Returns:
        Tuple of (user_id, headers carrying the issued bearer token).
    """
    response = client.post(
        "/api/register", json={"name": name, "email": email, "password": password}
    )
    assert response.status_code == 201, response.text
    body = response.json()
    return body["id"], bearer(body["token"])


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def b64_segment(data: dict) -> str:
    """Encode a dict the way a JWT header or payload segment is encoded."""
    raw = json.dumps(data, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def with_header(token: str, header: dict) -> str:
    """Swap the header segment of a token, keeping payload and signature."""
    _, payload, signature = token.split(".")
    return f"{b64_segment(header)}.{payload}.{signature}"
