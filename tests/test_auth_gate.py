"""
Tests for bearer token admission on protected endpoints.
"""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import Depends, Request

from customer_api.auth.dependencies import extract_bearer_token, require_token
from customer_api.auth.tokens import TokenService
from customer_api.models.user import TokenClaims

# Same secret as test_settings
TEST_SECRET = "test-secret-key-for-signing-tokens-0123456789"


@pytest.mark.parametrize(
    "header,expected",
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("Token abc", "abc"),
        ("Bearer", None),
        ("Bearer ", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


def test_missing_header_is_401(app_client):
    response = app_client.get("/protected-route")

    assert response.status_code == 401
    assert response.text == "Authorization token is missing"
    assert response.headers["www-authenticate"] == "Bearer"


def test_header_without_token_is_401(app_client):
    response = app_client.get("/protected-route", headers={"Authorization": "Bearer"})

    assert response.status_code == 401


def test_garbage_token_is_403(app_client):
    response = app_client.get("/protected-route", headers={"Authorization": "Bearer xyz"})

    assert response.status_code == 403
    assert response.text == "Invalid token"


def test_expired_token_is_403(app_client):
    tokens = TokenService(secret=TEST_SECRET)
    expired = tokens.issue(
        TokenClaims(email="ann@x.com", name="Ann"),
        now=datetime.now(UTC) - timedelta(hours=2),
    )

    response = app_client.get(
        "/protected-route", headers={"Authorization": f"Bearer {expired}"}
    )

    assert response.status_code == 403


def test_token_signed_with_other_secret_is_403(app_client):
    forged = TokenService(secret="some-other-secret-0123456789abcdef").issue(
        TokenClaims(email="ann@x.com", name="Ann")
    )

    response = app_client.get("/protected-route", headers={"Authorization": f"Bearer {forged}"})

    assert response.status_code == 403


def test_valid_token_is_admitted(app_client, auth_headers):
    response = app_client.get("/protected-route", headers=auth_headers)

    assert response.status_code == 200
    assert response.text == "Hello, You are authenticated!"


def test_scheme_word_is_not_checked(app_client, registered_user):
    response = app_client.get(
        "/protected-route", headers={"Authorization": f"Token {registered_user['token']}"}
    )

    assert response.status_code == 200


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_customer_item_routes_require_token(app_client, method):
    response = getattr(app_client, method)("/customers/1")

    assert response.status_code == 401


@pytest.mark.parametrize("path", ["/customers", "/search?query=a"])
def test_list_and_search_are_public(app_client, path):
    assert app_client.get(path).status_code == 200


def test_valid_token_exposes_claims_to_handler(app_client, auth_headers, registered_user):
    @app_client.app.get("/whoami")
    async def whoami(request: Request, user: TokenClaims = Depends(require_token)):
        return {"returned": user.model_dump(), "attached": request.state.user.model_dump()}

    response = app_client.get("/whoami", headers=auth_headers)

    expected = {"email": registered_user["email"], "name": registered_user["name"]}
    assert response.status_code == 200
    assert response.json() == {"returned": expected, "attached": expected}
