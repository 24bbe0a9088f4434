"""Search analytics API (admin): window stats and CSV export."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from app.api.v1.dependencies import get_analytics_service
from app.application.use_cases import SearchAnalyticsService
from app.schemas.analytics import SearchStatsResponse

admin_router = APIRouter()

AnalyticsSvc = Annotated[SearchAnalyticsService, Depends(get_analytics_service)]


@admin_router.get("/search", response_model=SearchStatsResponse)
async def search_stats(analytics_svc: AnalyticsSvc):
    """Today / yesterday / 7 / 30 day counts (UTC) and top 10 terms."""
    return SearchStatsResponse.model_validate(await analytics_svc.stats())


@admin_router.get(
    "/search/export",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}},
)
async def export_search_logs(analytics_svc: AnalyticsSvc) -> Response:
    """CSV download: Date,Time,Term,Category."""
    content = await analytics_svc.export_csv()
    filename = analytics_svc.export_filename()
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
