"""Auth API schemas."""

from pydantic import EmailStr, Field

from app.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """Request body for email/password registration."""

    email: EmailStr
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    display_name: str | None = Field(default=None, max_length=100)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1)


class AuthTokenResponse(CamelModel):
    """Firebase ID token (bearer for this API) plus the refresh token."""

    uid: str
    id_token: str
    refresh_token: str
    expires_in: int
    email: str | None = None
    token_type: str = "bearer"
