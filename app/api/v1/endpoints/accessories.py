"""Accessory (compatibility group) API: public reads and admin maintenance."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile

from app.api.v1.dependencies import (
    get_accessory_service,
    get_bulk_import_service,
)
from app.application.dtos.accessory import AccessoryCreate
from app.application.use_cases import AccessoryService, BulkImportService
from app.core.limiter import limit_upload, limit_writes
from app.schemas.accessory import (
    AccessoryCreateRequest,
    AccessoryResponse,
    AddModelRequest,
    BulkImportResponse,
)

router = APIRouter()
admin_router = APIRouter()

AccessorySvc = Annotated[AccessoryService, Depends(get_accessory_service)]


@router.get("", response_model=list[AccessoryResponse])
async def list_accessories(
    accessory_svc: AccessorySvc,
    category: Annotated[str | None, Query(description="accessoryType; all groups when omitted")] = None,
):
    groups = await accessory_svc.list_by_category(category)
    return [AccessoryResponse.model_validate(g) for g in groups]


@router.get("/{accessory_id}", response_model=AccessoryResponse)
async def get_accessory(accessory_id: str, accessory_svc: AccessorySvc):
    return AccessoryResponse.model_validate(await accessory_svc.get(accessory_id))


@admin_router.post("", response_model=AccessoryResponse, status_code=201)
@limit_writes
async def create_accessory(
    request: Request, body: AccessoryCreateRequest, accessory_svc: AccessorySvc
):
    """Manual entry: new group with contributor Admin and 0 points."""
    group = await accessory_svc.create(
        AccessoryCreate(
            accessory_type=body.accessory_type,
            models=body.models,
            source=body.source,
            contributor_name=body.contributor_name,
        )
    )
    return AccessoryResponse.model_validate(group)


@admin_router.post("/import", response_model=BulkImportResponse)
@limit_upload
async def import_accessories(
    request: Request,
    bulk_svc: Annotated[BulkImportService, Depends(get_bulk_import_service)],
    file: Annotated[UploadFile, File(description="CSV with model[,category,accessoryId,contributorName]")],
):
    """Bulk CSV import; models within a cell are separated by '|'."""
    result = await bulk_svc.import_accessories(await file.read())
    return BulkImportResponse.model_validate(result)


@admin_router.post("/{accessory_id}/models", response_model=AccessoryResponse)
@limit_writes
async def add_model(
    request: Request, accessory_id: str, body: AddModelRequest, accessory_svc: AccessorySvc
):
    group = await accessory_svc.add_model(accessory_id, body.name, body.contributor_name)
    return AccessoryResponse.model_validate(group)


@admin_router.delete("/{accessory_id}/models/{model_name:path}", response_model=AccessoryResponse)
@limit_writes
async def remove_model(
    request: Request, accessory_id: str, model_name: str, accessory_svc: AccessorySvc
):
    """Remove every entry with this name (case-insensitive); the name may contain '/'."""
    group = await accessory_svc.remove_model(accessory_id, model_name)
    return AccessoryResponse.model_validate(group)


@admin_router.delete("/{accessory_id}", status_code=204)
@limit_writes
async def delete_accessory(request: Request, accessory_id: str, accessory_svc: AccessorySvc):
    await accessory_svc.delete(accessory_id)


@admin_router.get("/{accessory_id}/raw", response_model=dict[str, Any])
async def get_raw_accessory(accessory_id: str, accessory_svc: AccessorySvc):
    """Stored document fields as-is (debug lookup)."""
    return await accessory_svc.get_raw(accessory_id)
