"""
Tests for the access guard: header state machine and the HTTP gate.
"""

from datetime import timedelta

import pytest
from fastapi import Depends, Request
from fastapi.testclient import TestClient

from stockroom.api.app import create_app
from stockroom.auth.guard import require_auth
from stockroom.auth.jwt import AuthConfig, RejectReason, TokenIssuer
from stockroom.core.utils import utc_now

OTHER_SECRET = "other-secret-0123456789abcdef0123456789abcdef"


# =============================================================================
# AccessGuard.check Tests
# =============================================================================


class TestAccessGuardCheck:
    @pytest.mark.parametrize("header", [None, ""])
    def test_missing_header(self, guard, header):
        result = guard.check(header)

        assert not result.ok
        assert result.reason == RejectReason.MISSING_HEADER

    @pytest.mark.parametrize("header", ["Bearer", "Bearer ", "   "])
    def test_missing_token_segment(self, guard, header):
        result = guard.check(header)

        assert not result.ok
        assert result.reason == RejectReason.MALFORMED_HEADER

    def test_valid_token_admits(self, guard, issuer):
        result = guard.check(f"Bearer {issuer.issue('user-1', 'alice')}")

        assert result.ok
        assert result.identity.to_dict() == {"id": "user-1", "username": "alice"}

    def test_expired_token(self, guard, issuer):
        token = issuer.issue("user-1", "alice", now=utc_now() - timedelta(days=2))

        result = guard.check(f"Bearer {token}")

        assert result.reason == RejectReason.EXPIRED

    def test_foreign_secret(self, guard):
        token = TokenIssuer(AuthConfig(secret=OTHER_SECRET)).issue("user-1", "alice")

        result = guard.check(f"Bearer {token}")

        assert result.reason == RejectReason.BAD_SIGNATURE

    def test_garbage_token(self, guard):
        assert guard.check("Bearer not.a.jwt").reason == RejectReason.MALFORMED_TOKEN

    def test_same_token_twice(self, guard, issuer):
        header = f"Bearer {issuer.issue('user-1', 'alice')}"

        first, second = guard.check(header), guard.check(header)

        assert first.ok and second.ok
        assert first.identity == second.identity


# =============================================================================
# HTTP Gate Tests
# =============================================================================


def _expired_token(issuer):
    return issuer.issue("user-1", "alice", now=utc_now() - timedelta(hours=25))


class TestProtectedRoutes:
    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"Authorization": "Bearer"},
            {"Authorization": "Bearer not.a.jwt"},
            {"Authorization": "Basic"},
        ],
    )
    def test_rejections_are_uniform(self, client, headers):
        response = client.get("/api/product", headers=headers)

        assert response.status_code == 401
        assert response.text == "Not authorized"

    def test_expired_token_rejected(self, client, issuer):
        response = client.get("/api/product", headers={"Authorization": f"Bearer {_expired_token(issuer)}"})

        assert response.status_code == 401
        assert response.text == "Not authorized"

    def test_foreign_secret_rejected(self, client):
        token = TokenIssuer(AuthConfig(secret=OTHER_SECRET)).issue("user-1", "alice")

        response = client.get("/api/provider", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.text == "Not authorized"

    def test_valid_token_admitted(self, client, auth_headers):
        response = client.get("/api/product", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"data": []}

    def test_guard_runs_before_validation(self, client):
        response = client.post("/api/provider", json={})

        assert response.status_code == 401

    def test_public_routes_stay_open(self, client):
        assert client.get("/").json() == {"message": "Hello, World!"}
        assert client.get("/health").status_code == 200


# =============================================================================
# Request Identity Tests
# =============================================================================


@pytest.fixture
def identity_client(settings, engine):
    app = create_app(settings, engine=engine)

    def whoami(request: Request):
        return request.state.identity.to_dict()

    app.add_api_route("/whoami", whoami, methods=["GET"], dependencies=[Depends(require_auth)])
    with TestClient(app) as client:
        yield client


class TestRequestIdentity:
    def test_admitted_request_carries_identity(self, identity_client, issuer):
        token = issuer.issue("user-1", "alice")

        response = identity_client.get("/whoami", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"id": "user-1", "username": "alice"}

    def test_integer_id_reaches_handler(self, identity_client, issuer):
        token = issuer.issue(1, "a")

        response = identity_client.get("/whoami", headers={"Authorization": f"Bearer {token}"})

        assert response.json() == {"id": 1, "username": "a"}

    def test_signup_token_identity_matches_account(self, identity_client):
        signup = identity_client.post("/signup", json={"username": "alice", "password": "pw1"})

        response = identity_client.get(
            "/whoami", headers={"Authorization": f"Bearer {signup.json()['token']}"}
        )

        assert response.json()["username"] == "alice"
        assert response.json()["id"]

    def test_rejected_request_never_reaches_handler(self, identity_client):
        response = identity_client.get("/whoami", headers={"Authorization": "Bearer not.a.jwt"})

        assert response.status_code == 401
        assert response.text == "Not authorized"
