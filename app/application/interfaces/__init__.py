"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

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
    PushOutcome,
)

__all__ = [
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
    "PushOutcome",
]
