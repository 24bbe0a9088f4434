"""DTOs for accessory (compatibility group) use cases."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ModelEntryResult:
    """One model inside a group, normalized from either stored encoding."""

    name: str
    contributor_uid: str | None = None
    contributor_name: str | None = None


@dataclass(frozen=True)
class ContributorSummary:
    """Creator summary stored on a group."""

    uid: str | None
    name: str | None
    points: int = 0


@dataclass(frozen=True)
class AccessoryResult:
    """Accessory read-model."""

    id: str
    accessory_type: str
    models: list[ModelEntryResult] = field(default_factory=list)
    contributor: ContributorSummary | None = None
    source: str | None = None
    last_updated: datetime | None = None

    @property
    def model_names(self) -> list[str]:
        return [m.name for m in self.models]


@dataclass(frozen=True)
class AccessoryCreate:
    """Manual group creation by an admin."""

    accessory_type: str
    models: list[str]
    source: str | None = None
    contributor_name: str | None = None
