"""
Registration and login flows.

Combines the credential store, the password hasher and the token service.
Errors are raised as ServiceError subclasses and rendered by the
application exception handler.
"""

from customer_api.auth.passwords import BCRYPT_MAX_PASSWORD_BYTES, PasswordHasher
from customer_api.auth.tokens import TokenService
from customer_api.errors import (
    DuplicateUserError,
    InternalError,
    InvalidPasswordError,
    InvalidUserError,
    MissingFieldError,
    StorageError,
    ValidationError,
    WeakPasswordError,
)
from customer_api.models.user import TokenClaims
from customer_api.observability.logging import get_logger
from customer_api.observability.metrics import track_auth_event
from customer_api.storage.users import DuplicateEmailError, UserStore

logger = get_logger(__name__)

# Passwords of this length or shorter are rejected
MIN_PASSWORD_LENGTH_EXCLUSIVE = 4


def password_length(password: str) -> int:
    """
    Length in UTF-16 code units.

    Characters outside the Basic Multilingual Plane (emoji) count as two,
    the way JavaScript clients measure string length.
    """
    return len(password.encode("utf-16-le")) // 2


class AuthService:
    """User registration and login."""

    def __init__(self, users: UserStore, hasher: PasswordHasher, tokens: TokenService):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    async def register(
        self, name: str | None, email: str | None, password: str | None
    ) -> str:
        """
        Create a user and return a bearer token for it.

        Raises:
            MissingFieldError: name, email or password absent/empty
            WeakPasswordError: password has 4 UTF-16 code units or fewer
            ValidationError: password exceeds the bcrypt input limit
            DuplicateUserError: email already registered
            InternalError: storage or hashing failure
        """
        if not name or not email or not password:
            track_auth_event("register", "rejected")
            raise MissingFieldError("Missing required fields: name, email, or password")

        if password_length(password) <= MIN_PASSWORD_LENGTH_EXCLUSIVE:
            track_auth_event("register", "rejected")
            raise WeakPasswordError()

        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            track_auth_event("register", "rejected")
            raise ValidationError("Password is too long")

        try:
            password_hash = await self.hasher.hash_async(password)

            if await self.users.get_by_email(email) is not None:
                track_auth_event("register", "duplicate")
                raise DuplicateUserError()

            user = await self.users.create(name=name, email=email, password_hash=password_hash)

        except DuplicateEmailError as e:
            # Lost a race with a concurrent registration for the same email
            track_auth_event("register", "duplicate")
            raise DuplicateUserError() from e
        except (StorageError, ValueError) as e:
            logger.error("Registration failed", error=str(e), exc_info=True)
            track_auth_event("register", "error")
            raise InternalError() from e

        logger.info("User registered", user_id=user.id)
        track_auth_event("register", "success")
        return self.tokens.issue(TokenClaims(email=user.email, name=user.name))

    async def login(self, email: str | None, password: str | None) -> str:
        """
        Check credentials and return a bearer token.

        Raises:
            MissingFieldError: email or password absent/empty
            InvalidUserError: no user with this email
            InvalidPasswordError: password does not match
            InternalError: storage or hashing failure
        """
        if not email or not password:
            track_auth_event("login", "rejected")
            raise MissingFieldError("Missing required fields: email or password")

        try:
            user = await self.users.get_by_email(email)
            if user is None:
                track_auth_event("login", "invalid_user")
                raise InvalidUserError()

            matched = await self.hasher.verify_async(password, user.password_hash)

        except (StorageError, ValueError) as e:
            logger.error("Login failed", error=str(e), exc_info=True)
            track_auth_event("login", "error")
            raise InternalError() from e

        if not matched:
            track_auth_event("login", "invalid_password")
            raise InvalidPasswordError()

        logger.info("User logged in", user_id=user.id)
        track_auth_event("login", "success")
        return self.tokens.issue(TokenClaims(email=user.email, name=user.name))
