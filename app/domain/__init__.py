"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import (
    AccessoryEntity,
    ContributionEntity,
    clean_model_names,
    model_name,
    new_model_names,
)
from app.domain.enums import ContributionStatus, UserRole
from app.domain.exceptions import (
    AccountSuspendedException,
    AuthenticationException,
    AuthorizationException,
    ContributionAlreadyReviewedException,
    FitmyphoneException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    # Entities
    "AccessoryEntity",
    "ContributionEntity",
    "clean_model_names",
    "model_name",
    "new_model_names",
    # Enums
    "ContributionStatus",
    "UserRole",
    # Exceptions
    "AccountSuspendedException",
    "AuthenticationException",
    "AuthorizationException",
    "ContributionAlreadyReviewedException",
    "FitmyphoneException",
    "ResourceNotFoundException",
    "ValidationException",
]
