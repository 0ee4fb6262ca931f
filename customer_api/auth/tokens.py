"""
Stateless bearer tokens (JWT, HMAC-signed).

Tokens embed {email, name} plus iat/exp and are verified without any
server-side lookup. There is no revocation: a token stays valid until exp.
"""

from datetime import UTC, datetime, timedelta

import jwt

from customer_api.errors import InvalidTokenError
from customer_api.models.user import TokenClaims


class TokenService:
    """Issues and verifies signed, time-limited tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=1),
    ):
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, claims: TokenClaims, now: datetime | None = None) -> str:
        """
        Sign a token for the given claims.

        Args:
            claims: email and name of the authenticated user
            now: Issue time (defaults to current UTC time)

        Returns:
            str: Encoded JWT
        """
        issued_at = now or datetime.now(UTC)
        payload = {
            "email": claims.email,
            "name": claims.name,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.expires_in).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token.

        Raises:
            InvalidTokenError: Bad signature, malformed token, missing claims
                or expired. The cases are not distinguished.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError() from e

        email = payload.get("email")
        name = payload.get("name")
        if not isinstance(email, str) or not isinstance(name, str):
            raise InvalidTokenError()

        return TokenClaims(email=email, name=name)
