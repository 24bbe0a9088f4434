"""External service clients (from app.state) and use-case dependencies."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from app.api.v1.dependencies.store import (
    get_accessory_repo,
    get_bulk_accessory_writer,
    get_category_repo,
    get_contribution_repo,
    get_master_model_repo,
    get_push_token_repo,
    get_reconciliation_service,
    get_search_log_repo,
    get_user_repo,
)
from app.application.interfaces.repositories import (
    IAccessoryRepository,
    IBulkAccessoryWriter,
    ICategoryRepository,
    IContributionRepository,
    IMasterModelRepository,
    IPushTokenRepository,
    IReconciliationService,
    ISearchLogRepository,
    IUserRepository,
)
from app.application.interfaces.services import (
    IAuthProvider,
    IPushSender,
    ISuggestionService,
    ITokenVerifier,
)
from app.application.use_cases import (
    AccessoryService,
    AuthService,
    BulkImportService,
    CatalogService,
    ContributionService,
    NotificationService,
    SearchAnalyticsService,
    SearchService,
    UserService,
)
from app.core.config import get_settings
from app.domain.exceptions import ServiceNotConfiguredException


def get_token_verifier(request: Request) -> ITokenVerifier:
    verifier = getattr(request.app.state, "token_verifier", None)
    if verifier is None:
        raise ServiceNotConfiguredException("token_verification")
    return verifier


def get_auth_provider_optional(request: Request) -> IAuthProvider | None:
    return getattr(request.app.state, "auth_provider", None)


def get_auth_provider(
    provider: Annotated[IAuthProvider | None, Depends(get_auth_provider_optional)],
) -> IAuthProvider:
    """Firebase Auth client; 503 when FIREBASE_WEB_API_KEY is not set."""
    if provider is None:
        raise ServiceNotConfiguredException("firebase_auth")
    return provider


def get_push_sender(request: Request) -> IPushSender | None:
    return getattr(request.app.state, "push_sender", None)


def get_suggestion_service(request: Request) -> ISuggestionService | None:
    """LLM client, or None when LLM_API_KEY is not set (search then returns no suggestions)."""
    return getattr(request.app.state, "suggestion_service", None)


def get_accessory_service(
    accessory_repo: Annotated[IAccessoryRepository, Depends(get_accessory_repo)],
) -> AccessoryService:
    return AccessoryService(accessory_repo)


def get_contribution_service(
    contribution_repo: Annotated[IContributionRepository, Depends(get_contribution_repo)],
    accessory_repo: Annotated[IAccessoryRepository, Depends(get_accessory_repo)],
    category_repo: Annotated[ICategoryRepository, Depends(get_category_repo)],
    reconciliation: Annotated[IReconciliationService, Depends(get_reconciliation_service)],
) -> ContributionService:
    return ContributionService(
        contribution_repo,
        accessory_repo,
        category_repo,
        reconciliation,
        reward_points=get_settings().contribution_reward_points,
    )


def get_bulk_import_service(
    writer: Annotated[IBulkAccessoryWriter, Depends(get_bulk_accessory_writer)],
    master_model_repo: Annotated[IMasterModelRepository, Depends(get_master_model_repo)],
) -> BulkImportService:
    return BulkImportService(
        writer, master_model_repo, batch_size=get_settings().bulk_write_batch_size
    )


def get_catalog_service(
    category_repo: Annotated[ICategoryRepository, Depends(get_category_repo)],
    master_model_repo: Annotated[IMasterModelRepository, Depends(get_master_model_repo)],
) -> CatalogService:
    return CatalogService(category_repo, master_model_repo)


def get_search_service(
    accessory_repo: Annotated[IAccessoryRepository, Depends(get_accessory_repo)],
    search_log_repo: Annotated[ISearchLogRepository, Depends(get_search_log_repo)],
    suggestion_service: Annotated[ISuggestionService | None, Depends(get_suggestion_service)],
) -> SearchService:
    return SearchService(
        accessory_repo,
        search_log_repo,
        suggestion_service,
        min_term_length=get_settings().search_min_term_length,
    )


def get_analytics_service(
    search_log_repo: Annotated[ISearchLogRepository, Depends(get_search_log_repo)],
) -> SearchAnalyticsService:
    return SearchAnalyticsService(search_log_repo, window=get_settings().analytics_log_window)


def get_user_service(
    user_repo: Annotated[IUserRepository, Depends(get_user_repo)],
    auth_provider: Annotated[IAuthProvider | None, Depends(get_auth_provider_optional)],
) -> UserService:
    return UserService(user_repo, auth_provider)


def get_auth_service(
    auth_provider: Annotated[IAuthProvider, Depends(get_auth_provider)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repo)],
) -> AuthService:
    secret = get_settings().bootstrap_admin_secret
    return AuthService(
        auth_provider,
        user_repo,
        bootstrap_admin_secret=secret.get_secret_value() if secret else None,
    )


def get_notification_service(
    push_token_repo: Annotated[IPushTokenRepository, Depends(get_push_token_repo)],
    push_sender: Annotated[IPushSender | None, Depends(get_push_sender)],
) -> NotificationService:
    return NotificationService(push_token_repo, push_sender)
