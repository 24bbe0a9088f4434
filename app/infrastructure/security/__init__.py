"""Security: Firebase ID token verification."""

from app.infrastructure.security.jwt import FirebaseTokenVerifier

__all__ = ["FirebaseTokenVerifier"]
