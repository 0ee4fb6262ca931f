"""
FastAPI dependencies for bearer token authentication.

Security:
- Missing token → 401, invalid/expired token → 403
- Verified claims attached to request.state.user for downstream handlers
- No per-request state beyond the immutable signing secret
"""

from typing import Optional

from fastapi import Depends, Header, Request

from customer_api.auth.service import AuthService
from customer_api.auth.tokens import TokenService
from customer_api.errors import InvalidTokenError, MissingTokenError
from customer_api.models.user import TokenClaims
from customer_api.observability.logging import get_logger, set_user_email
from customer_api.observability.metrics import track_auth_event

logger = get_logger(__name__)


def get_token_service(request: Request) -> TokenService:
    """Token service holding the process-wide signing secret."""
    return request.app.state.token_service


def get_auth_service(request: Request) -> AuthService:
    """Registration/login service."""
    return request.app.state.auth_service


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Extract the token from an Authorization header.

    Expects "<scheme> <token>" and returns the second part. The scheme word
    itself is not checked.

    Returns:
        Token string, or None if the header is absent or has no token part
    """
    if not authorization:
        return None

    parts = authorization.split(" ")
    if len(parts) < 2 or not parts[1]:
        return None

    return parts[1]


async def require_token(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Admit the request only if it carries a valid bearer token.

    Returns:
        TokenClaims: Decoded {email, name}

    Raises:
        MissingTokenError (401): No token on the request
        InvalidTokenError (403): Signature, format or expiry check failed

    Usage:
        @router.get("/customers/{customer_id}")
        async def get_customer(user: TokenClaims = Depends(require_token)):
            ...
    """
    token = extract_bearer_token(authorization)
    if token is None:
        track_auth_event("verify", "missing")
        raise MissingTokenError()

    try:
        claims = tokens.verify(token)
    except InvalidTokenError:
        logger.warning("Bearer token rejected", path=request.url.path)
        track_auth_event("verify", "invalid")
        raise

    request.state.user = claims
    set_user_email(claims.email)
    track_auth_event("verify", "success")
    return claims
