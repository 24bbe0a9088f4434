"""API dependencies (composition root).

Routes depend only on these; repositories and clients are built here.
"""

from app.api.v1.dependencies.auth import (
    ActiveUser,
    AdminUser,
    CurrentUser,
    get_active_user,
    get_current_user,
    get_current_user_optional,
    require_admin,
)
from app.api.v1.dependencies.services import (
    get_accessory_service,
    get_analytics_service,
    get_auth_provider,
    get_auth_service,
    get_bulk_import_service,
    get_catalog_service,
    get_contribution_service,
    get_notification_service,
    get_push_sender,
    get_search_service,
    get_suggestion_service,
    get_token_verifier,
    get_user_service,
)
from app.api.v1.dependencies.store import get_firestore, get_user_repo

__all__ = [
    "ActiveUser",
    "AdminUser",
    "CurrentUser",
    "get_accessory_service",
    "get_active_user",
    "get_analytics_service",
    "get_auth_provider",
    "get_auth_service",
    "get_bulk_import_service",
    "get_catalog_service",
    "get_contribution_service",
    "get_current_user",
    "get_current_user_optional",
    "get_firestore",
    "get_notification_service",
    "get_push_sender",
    "get_search_service",
    "get_suggestion_service",
    "get_token_verifier",
    "get_user_repo",
    "get_user_service",
    "require_admin",
]
