"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from app.domain.enums import ContributionStatus, UserRole

if TYPE_CHECKING:
    from app.application.dtos.accessory import AccessoryCreate, AccessoryResult
    from app.application.dtos.analytics import SearchLogEntry
    from app.application.dtos.bulk_import import BulkImportResult, BulkImportRow
    from app.application.dtos.catalog import CategoryResult, MasterModelResult
    from app.application.dtos.contribution import (
        ApprovalResult,
        ContributionEdit,
        ContributionResult,
    )
    from app.application.dtos.user import ProfileUpdate, TokenClaims, UserResult


class IAccessoryRepository(Protocol):
    """Protocol for accessory (compatibility group) repository (DIP)."""

    async def get_by_id(self, accessory_id: str) -> AccessoryResult | None:
        """Return the group or None."""

    async def get_raw(self, accessory_id: str) -> dict[str, Any] | None:
        """Return the stored document fields as-is (debug lookup)."""

    async def list_by_category(self, category: str | None) -> list[AccessoryResult]:
        """Return groups whose accessoryType equals category (all groups when None)."""

    async def create(self, data: AccessoryCreate) -> AccessoryResult:
        """Create a group with a generated id."""

    async def add_model(
        self, accessory_id: str, name: str, contributor_name: str | None = None
    ) -> None:
        """Append one model entry (array union); group must exist."""

    async def remove_model(self, accessory_id: str, name: str) -> int:
        """Remove entries named name (case-insensitive); return how many were removed."""

    async def delete(self, accessory_id: str) -> None:
        """Delete the group; ResourceNotFoundException when missing."""


class IContributionRepository(Protocol):
    """Protocol for contribution repository (DIP)."""

    async def get_by_id(self, contribution_id: str) -> ContributionResult | None:
        """Return the contribution or None."""

    async def create(
        self,
        submitted_by: str,
        accessory_type: str,
        models: list[str],
        source: str,
        add_to_accessory_id: str | None = None,
    ) -> ContributionResult:
        """Create a pending contribution."""

    async def list_by_status(self, status: ContributionStatus) -> list[ContributionResult]:
        """Return contributions with status, newest first."""

    async def list_for_user(self, uid: str) -> list[ContributionResult]:
        """Return the user's contributions, newest first."""

    async def delete(self, contribution_id: str) -> None:
        """Hard delete; ResourceNotFoundException when missing."""


class IReconciliationService(Protocol):
    """Protocol for the transactional review workflow (DIP)."""

    async def approve(
        self, contribution_id: str, reviewer_uid: str, points: int
    ) -> ApprovalResult:
        """Merge the contribution into its group, award points, mark approved (atomic)."""

    async def reject(
        self, contribution_id: str, reviewer_uid: str, reason: str | None = None
    ) -> ContributionResult:
        """Mark a pending contribution rejected."""

    async def edit(self, contribution_id: str, data: ContributionEdit) -> ContributionResult:
        """Overwrite fields of a non-approved contribution."""


class IUserRepository(Protocol):
    """Protocol for user profile repository (DIP)."""

    async def get_by_id(self, uid: str) -> UserResult | None:
        """Return the profile or None."""

    async def get_or_create(self, claims: TokenClaims) -> UserResult:
        """Return the profile, creating it from token claims on first access."""

    async def create(
        self,
        uid: str,
        display_name: str | None,
        email: str | None,
        role: UserRole = UserRole.USER,
    ) -> UserResult:
        """Create (or overwrite) the profile document."""

    async def update_profile(self, uid: str, data: ProfileUpdate) -> UserResult:
        """Update self-editable fields; ResourceNotFoundException when missing."""

    async def list_all(self) -> list[UserResult]:
        """Return all profiles ordered by displayName."""

    async def set_role(self, uid: str, role: UserRole) -> UserResult:
        """Change role; ResourceNotFoundException when missing."""

    async def set_suspended(self, uid: str, suspended: bool) -> UserResult:
        """Change suspension flag; ResourceNotFoundException when missing."""

    async def top_by_points(self, limit: int) -> list[UserResult]:
        """Return up to limit non-suspended users, points descending."""

    async def delete(self, uid: str) -> None:
        """Delete the profile document (idempotent)."""


class ICategoryRepository(Protocol):
    """Protocol for category repository (DIP)."""

    async def list_all(self) -> list[CategoryResult]:
        """Return categories ordered by name."""

    async def add(self, name: str) -> CategoryResult:
        """Add a category; CategoryAlreadyExistsException on case-insensitive duplicate."""

    async def exists(self, name: str) -> bool:
        """Return whether a category with exactly this name exists."""

    async def delete(self, category_id: str) -> None:
        """Delete a category (idempotent)."""


class IMasterModelRepository(Protocol):
    """Protocol for master model repository (DIP)."""

    async def list_all(self) -> list[MasterModelResult]:
        """Return master models ordered by name."""

    async def add(self, name: str) -> MasterModelResult:
        """Add a name; MasterModelAlreadyExistsException when present."""

    async def add_many(self, names: list[str]) -> int:
        """Add names not yet present; return how many were added."""

    async def delete(self, model_id: str) -> None:
        """Delete by id; ResourceNotFoundException when missing."""


class ISearchLogRepository(Protocol):
    """Protocol for the append-only search log (DIP)."""

    async def add(self, term: str, category: str | None) -> None:
        """Append one search entry."""

    async def latest(self, limit: int) -> list[SearchLogEntry]:
        """Return the newest entries, timestamp descending."""


class IPushTokenRepository(Protocol):
    """Protocol for FCM device token repository (DIP)."""

    async def add(self, uid: str, token: str) -> None:
        """Register a device token for uid (idempotent per token)."""

    async def remove(self, token: str) -> None:
        """Forget a device token (idempotent)."""

    async def list_tokens(self) -> list[str]:
        """Return every registered token."""


class IBulkAccessoryWriter(Protocol):
    """Protocol for batched accessory import writes (DIP)."""

    async def write(
        self, rows: list[BulkImportRow], batch_size: int, skipped: int = 0
    ) -> BulkImportResult:
        """Write rows in concurrent batches of at most batch_size writes."""
