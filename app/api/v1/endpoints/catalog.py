"""Categories and master models: public lists, admin writes and CSV import."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Request, UploadFile

from app.api.v1.dependencies import get_bulk_import_service, get_catalog_service
from app.application.use_cases import BulkImportService, CatalogService
from app.core.limiter import limit_upload, limit_writes
from app.schemas.catalog import (
    CategoryCreateRequest,
    CategoryResponse,
    MasterModelCreateRequest,
    MasterModelImportResponse,
    MasterModelResponse,
)

categories_router = APIRouter()
master_models_router = APIRouter()
admin_categories_router = APIRouter()
admin_master_models_router = APIRouter()

CatalogSvc = Annotated[CatalogService, Depends(get_catalog_service)]


@categories_router.get("", response_model=list[CategoryResponse])
async def list_categories(catalog_svc: CatalogSvc):
    return [CategoryResponse.model_validate(c) for c in await catalog_svc.list_categories()]


@admin_categories_router.post("", response_model=CategoryResponse, status_code=201)
@limit_writes
async def add_category(request: Request, body: CategoryCreateRequest, catalog_svc: CatalogSvc):
    """Add a category; 409 when one with the same name (any case) exists."""
    return CategoryResponse.model_validate(await catalog_svc.add_category(body.name))


@admin_categories_router.delete("/{category_id}", status_code=204)
@limit_writes
async def delete_category(request: Request, category_id: str, catalog_svc: CatalogSvc):
    await catalog_svc.delete_category(category_id)


@master_models_router.get("", response_model=list[MasterModelResponse])
async def list_master_models(catalog_svc: CatalogSvc):
    return [MasterModelResponse.model_validate(m) for m in await catalog_svc.list_master_models()]


@admin_master_models_router.post("", response_model=MasterModelResponse, status_code=201)
@limit_writes
async def add_master_model(
    request: Request, body: MasterModelCreateRequest, catalog_svc: CatalogSvc
):
    return MasterModelResponse.model_validate(await catalog_svc.add_master_model(body.name))


@admin_master_models_router.post("/import", response_model=MasterModelImportResponse)
@limit_upload
async def import_master_models(
    request: Request,
    bulk_svc: Annotated[BulkImportService, Depends(get_bulk_import_service)],
    file: Annotated[UploadFile, File(description="CSV with a model / master model / name / value column")],
):
    result = await bulk_svc.import_master_models(await file.read())
    return MasterModelImportResponse.model_validate(result)


@admin_master_models_router.delete("/{model_id}", status_code=204)
@limit_writes
async def delete_master_model(request: Request, model_id: str, catalog_svc: CatalogSvc):
    await catalog_svc.delete_master_model(model_id)
