"""Behavior of the bearer-token gate in front of protected routes."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import APIRouter, Depends, Request

from api.deps import current_user_id, lookup_user_id, require_bearer
from auth.tokens import issue_token
from tests.helpers import TEST_SECRET, bearer, register, with_header


@pytest.fixture
def calls():
    return []


@pytest.fixture
def gated_client(app, client, calls):
    """Client for an app with a gated route that records each call."""
    router = APIRouter(dependencies=[Depends(require_bearer)])

    @router.get("/whoami")
    def whoami(user_id: int = Depends(current_user_id)):
        calls.append(user_id)
        return {"user_id": user_id}

    app.include_router(router)
    return client


class TestBearerGate:
    def test_valid_token_binds_user(self, gated_client, calls):
        user_id, headers = register(gated_client)

        response = gated_client.get("/whoami", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"user_id": user_id}
        assert calls == [user_id]

    def test_missing_header(self, gated_client, calls):
        response = gated_client.get("/whoami")

        assert response.status_code == 401
        assert response.json()["error"] == "missing_bearer_token"
        assert calls == []

    @pytest.mark.parametrize(
        "header", ["Basic dXNlcjpwYXNz", "bearer abc", "Token abc", "Bearer"]
    )
    def test_non_bearer_header(self, gated_client, calls, header):
        response = gated_client.get("/whoami", headers={"Authorization": header})

        assert response.status_code == 401
        assert calls == []

    def test_expired_token(self, gated_client, calls):
        user_id, _ = register(gated_client)
        issued = datetime.now(timezone.utc) - timedelta(hours=2)
        token = issue_token(user_id, TEST_SECRET, timedelta(hours=1), now=issued)

        response = gated_client.get("/whoami", headers=bearer(token))

        assert response.status_code == 401
        assert response.json()["error"] == "invalid_token"
        assert calls == []

    def test_token_signed_with_other_secret(self, gated_client, calls):
        user_id, _ = register(gated_client)
        token = issue_token(user_id, "some-other-secret-entirely-not-the-servers", timedelta(hours=1))

        response = gated_client.get("/whoami", headers=bearer(token))

        assert response.status_code == 401
        assert calls == []

    def test_tampered_payload(self, gated_client, calls):
        user_id, headers = register(gated_client)
        token = headers["Authorization"].removeprefix("Bearer ")
        forged = jwt.encode(
            {"uid": user_id + 1, "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "attacker-controlled-secret-of-sufficient-length",
            algorithm="HS256",
        )
        header, _, signature = token.split(".")
        tampered = f"{header}.{forged.split('.')[1]}.{signature}"

        response = gated_client.get("/whoami", headers=bearer(tampered))

        assert response.status_code == 401
        assert calls == []

    def test_unsigned_token(self, gated_client, calls):
        user_id, headers = register(gated_client)
        token = headers["Authorization"].removeprefix("Bearer ")
        unsigned = with_header(token, {"alg": "none", "typ": "JWT"})

        response = gated_client.get("/whoami", headers=bearer(unsigned))

        assert response.status_code == 401
        assert calls == []

    def test_every_resource_is_gated(self, client):
        for path in [
            "/api/me",
            "/api/categories",
            "/api/transactions",
            "/api/budgets?month=2024-03",
            "/api/dashboard/summary?month=2024-03",
            "/api/dashboard/categories?month=2024-03",
            "/api/dashboard/budgets?month=2024-03",
        ]:
            assert client.get(path).status_code == 401, path


class TestIdentityLookup:
    def test_route_without_gate_fails_closed(self, app, client):
        """Reading the identity on an ungated route is a server error, not a guest."""
        router = APIRouter()

        @router.get("/ungated")
        def ungated(user_id: int = Depends(current_user_id)):
            return {"user_id": user_id}

        app.include_router(router)

        response = client.get("/ungated")

        assert response.status_code == 500
        assert response.json() == {"error": "server"}

    def test_lookup_reports_absence(self, app, client):
        router = APIRouter()

        @router.get("/lookup")
        def lookup(request: Request):
            return {"user_id": lookup_user_id(request)}

        app.include_router(router)

        assert client.get("/lookup").json() == {"user_id": None}
