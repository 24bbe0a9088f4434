"""Application DTOs (no persistence dependency)."""

from app.application.dtos.accessory import (
    AccessoryCreate,
    AccessoryResult,
    ContributorSummary,
    ModelEntryResult,
)
from app.application.dtos.analytics import SearchLogEntry, SearchStats, TermCount
from app.application.dtos.bulk_import import (
    BulkImportResult,
    BulkImportRow,
    MasterModelImportResult,
    ParsedAccessoryCsv,
)
from app.application.dtos.catalog import CategoryResult, MasterModelResult
from app.application.dtos.contribution import (
    ApprovalResult,
    ContributionEdit,
    ContributionResult,
    ContributionSubmit,
)
from app.application.dtos.notification import PushMessage, PushSendResult
from app.application.dtos.search import SearchResult, SearchResultItem, SuggestionResult
from app.application.dtos.user import (
    AuthenticatedUser,
    AuthSession,
    LeaderboardEntry,
    ProfileUpdate,
    TokenClaims,
    UserResult,
)

__all__ = [
    "AccessoryCreate",
    "AccessoryResult",
    "ApprovalResult",
    "AuthSession",
    "AuthenticatedUser",
    "BulkImportResult",
    "BulkImportRow",
    "CategoryResult",
    "ContributionEdit",
    "ContributionResult",
    "ContributionSubmit",
    "ContributorSummary",
    "LeaderboardEntry",
    "MasterModelImportResult",
    "MasterModelResult",
    "ModelEntryResult",
    "ParsedAccessoryCsv",
    "ProfileUpdate",
    "PushMessage",
    "PushSendResult",
    "SearchLogEntry",
    "SearchResult",
    "SearchResultItem",
    "SearchStats",
    "SuggestionResult",
    "TermCount",
    "TokenClaims",
    "UserResult",
]
