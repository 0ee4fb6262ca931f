"""
Registration, login and token check endpoints.

Errors (400 missing/weak/duplicate/invalid credentials, 401/403 token,
500 internal) are raised as ServiceError and rendered by the application
exception handler.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from customer_api.auth.dependencies import get_auth_service, require_token
from customer_api.auth.service import AuthService
from customer_api.models.user import LoginRequest, RegisterRequest, TokenClaims, TokenResponse

router = APIRouter(tags=["Auth"])


@router.post("/register", response_model=TokenResponse)
async def register(
    body: RegisterRequest | None = None,
    auth: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Register a new user.

    Returns:
        TokenResponse: {"jwtToken": "..."} valid for one hour

    Raises:
        400: Missing field, password of 4 characters or fewer, email taken
        500: Storage failure
    """
    body = body or RegisterRequest()
    token = await auth.register(name=body.name, email=body.email, password=body.password)
    return TokenResponse(jwt_token=token)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest | None = None,
    auth: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Exchange email and password for a bearer token.

    Raises:
        400: Missing field, "Invalid User" or "Invalid Password"
        500: Storage failure
    """
    body = body or LoginRequest()
    token = await auth.login(email=body.email, password=body.password)
    return TokenResponse(jwt_token=token)


@router.get("/protected-route", response_class=PlainTextResponse)
async def protected_route(user: TokenClaims = Depends(require_token)) -> str:
    """Confirm that the bearer token is valid."""
    return "Hello, You are authenticated!"
