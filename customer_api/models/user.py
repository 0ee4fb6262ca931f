"""
User identity and token models.

Users are created only through registration. The stored password_hash is a
bcrypt string (salt and cost embedded), never the plaintext.
"""

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """Registered user as stored in the users table."""

    id: int | None = Field(default=None, description="Row identifier")
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1, description="Exact-match unique login")
    password_hash: str = Field(..., description="bcrypt hash (self-describing)")


class TokenClaims(BaseModel):
    """Claims embedded in a bearer token."""

    email: str
    name: str


# Request bodies are permissive: presence and length checks happen in
# AuthService so missing fields map to 400 rather than 422.


class RegisterRequest(BaseModel):
    """Schema for POST /register."""

    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    """Schema for POST /login."""

    email: str | None = None
    password: str | None = None


class TokenResponse(BaseModel):
    """Bearer token returned by register and login."""

    model_config = ConfigDict(populate_by_name=True)

    jwt_token: str = Field(..., alias="jwtToken")
