"""Domain entities and aggregates.

Pure domain models; no persistence concerns.
"""

from app.domain.entities.accessory import (
    AccessoryEntity,
    clean_model_names,
    model_name,
    new_model_names,
)
from app.domain.entities.contribution import ContributionEntity

__all__ = [
    "AccessoryEntity",
    "ContributionEntity",
    "clean_model_names",
    "model_name",
    "new_model_names",
]
