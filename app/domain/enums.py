"""Domain enumerations for the Fitmyphone application.

Enums represent fixed sets of domain values stored as strings in Firestore.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ContributionStatus(_ValuesMixin, str, Enum):
    """Review lifecycle of a user contribution.

    pending -> approved (terminal) or pending -> rejected; a rejected
    contribution goes back to pending when an admin edits it.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class UserRole(_ValuesMixin, str, Enum):
    """Role stored on users/{uid}; admin routes require ADMIN."""

    USER = "user"
    ADMIN = "admin"
