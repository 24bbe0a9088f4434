"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (Firestore repos, Firebase Auth, FCM, LLM).
"""

from app.application.interfaces import (
    IAccessoryRepository,
    IAuthProvider,
    IBulkAccessoryWriter,
    ICategoryRepository,
    IContributionRepository,
    IMasterModelRepository,
    IPushSender,
    IPushTokenRepository,
    IReconciliationService,
    ISearchLogRepository,
    ISuggestionService,
    ITokenVerifier,
    IUserRepository,
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

__all__ = [
    "AccessoryService",
    "AuthService",
    "BulkImportService",
    "CatalogService",
    "ContributionService",
    "IAccessoryRepository",
    "IAuthProvider",
    "IBulkAccessoryWriter",
    "ICategoryRepository",
    "IContributionRepository",
    "IMasterModelRepository",
    "IPushSender",
    "IPushTokenRepository",
    "IReconciliationService",
    "ISearchLogRepository",
    "ISuggestionService",
    "ITokenVerifier",
    "IUserRepository",
    "NotificationService",
    "SearchAnalyticsService",
    "SearchService",
    "UserService",
]
