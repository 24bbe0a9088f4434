"""Firestore implementations of the application repository ports."""

from app.infrastructure.firebase.repositories.accessory_repo_firestore import (
    FirestoreAccessoryRepository,
)
from app.infrastructure.firebase.repositories.category_repo_firestore import (
    FirestoreCategoryRepository,
)
from app.infrastructure.firebase.repositories.contribution_repo_firestore import (
    FirestoreContributionRepository,
)
from app.infrastructure.firebase.repositories.master_model_repo_firestore import (
    FirestoreMasterModelRepository,
)
from app.infrastructure.firebase.repositories.push_token_repo_firestore import (
    FirestorePushTokenRepository,
)
from app.infrastructure.firebase.repositories.search_log_repo_firestore import (
    FirestoreSearchLogRepository,
)
from app.infrastructure.firebase.repositories.user_repo_firestore import (
    FirestoreUserRepository,
)

__all__ = [
    "FirestoreAccessoryRepository",
    "FirestoreCategoryRepository",
    "FirestoreContributionRepository",
    "FirestoreMasterModelRepository",
    "FirestorePushTokenRepository",
    "FirestoreSearchLogRepository",
    "FirestoreUserRepository",
]
