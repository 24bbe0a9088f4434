"""API v1 router aggregation.

Public and user routes first, then admin routes under /admin. Every admin
router is guarded by require_admin (role read from users/{uid}).
"""

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import require_admin
from app.api.v1.endpoints import (
    accessories,
    analytics,
    auth,
    catalog,
    contributions,
    health,
    notifications,
    search,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(accessories.router, prefix="/accessories", tags=["accessories"])
api_router.include_router(catalog.categories_router, prefix="/categories", tags=["categories"])
api_router.include_router(
    catalog.master_models_router, prefix="/master-models", tags=["master-models"]
)
api_router.include_router(
    contributions.router, prefix="/contributions", tags=["contributions"]
)
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(users.leaderboard_router, prefix="/leaderboard", tags=["leaderboard"])
api_router.include_router(
    notifications.router, prefix="/notifications", tags=["notifications"]
)

admin_router = APIRouter(dependencies=[Depends(require_admin)])
admin_router.include_router(accessories.admin_router, prefix="/accessories")
admin_router.include_router(contributions.admin_router, prefix="/contributions")
admin_router.include_router(catalog.admin_categories_router, prefix="/categories")
admin_router.include_router(catalog.admin_master_models_router, prefix="/master-models")
admin_router.include_router(users.admin_router, prefix="/users")
admin_router.include_router(analytics.admin_router, prefix="/analytics")
admin_router.include_router(notifications.admin_router, prefix="/notifications")

api_router.include_router(admin_router, prefix="/admin", tags=["admin"])
