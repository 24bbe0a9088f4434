"""Application use cases: one entry point per workflow."""

from app.application.use_cases.accessories import AccessoryService
from app.application.use_cases.analytics import SearchAnalyticsService
from app.application.use_cases.auth import AuthService
from app.application.use_cases.bulk_import import BulkImportService
from app.application.use_cases.catalog import CatalogService
from app.application.use_cases.contributions import ContributionService
from app.application.use_cases.notifications import NotificationService
from app.application.use_cases.search import SearchService
from app.application.use_cases.users import UserService

__all__ = [
    "AccessoryService",
    "AuthService",
    "BulkImportService",
    "CatalogService",
    "ContributionService",
    "NotificationService",
    "SearchAnalyticsService",
    "SearchService",
    "UserService",
]
