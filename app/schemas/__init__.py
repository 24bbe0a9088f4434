"""Pydantic request/response schemas for the API."""

from app.schemas.accessory import (
    AccessoryCreateRequest,
    AccessoryResponse,
    AddModelRequest,
    BulkImportResponse,
)
from app.schemas.analytics import SearchStatsResponse
from app.schemas.auth import AuthTokenResponse, LoginRequest, RefreshRequest, RegisterRequest
from app.schemas.catalog import (
    CategoryCreateRequest,
    CategoryResponse,
    MasterModelCreateRequest,
    MasterModelImportResponse,
    MasterModelResponse,
)
from app.schemas.common import CamelModel
from app.schemas.contribution import (
    ApprovalResponse,
    ApproveRequest,
    ContributionEditRequest,
    ContributionResponse,
    ContributionSubmitRequest,
    RejectRequest,
)
from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.notification import BroadcastRequest, BroadcastResponse, PushTokenRequest
from app.schemas.search import SearchResponse
from app.schemas.user import (
    LeaderboardEntryResponse,
    ProfileUpdateRequest,
    RoleUpdateRequest,
    SuspensionUpdateRequest,
    UserResponse,
)

__all__ = [
    "AccessoryCreateRequest",
    "AccessoryResponse",
    "AddModelRequest",
    "ApprovalResponse",
    "ApproveRequest",
    "AuthTokenResponse",
    "BroadcastRequest",
    "BroadcastResponse",
    "BulkImportResponse",
    "CamelModel",
    "CategoryCreateRequest",
    "CategoryResponse",
    "ContributionEditRequest",
    "ContributionResponse",
    "ContributionSubmitRequest",
    "HealthResponse",
    "LeaderboardEntryResponse",
    "LoginRequest",
    "MasterModelCreateRequest",
    "MasterModelImportResponse",
    "MasterModelResponse",
    "ProfileUpdateRequest",
    "PushTokenRequest",
    "ReadinessResponse",
    "RefreshRequest",
    "RegisterRequest",
    "RejectRequest",
    "RoleUpdateRequest",
    "SearchResponse",
    "SearchStatsResponse",
    "SuspensionUpdateRequest",
    "UserResponse",
]
