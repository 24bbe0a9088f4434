"""Accessory (compatibility group) API schemas."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class ModelEntryResponse(CamelModel):
    name: str
    contributor_uid: str | None = None
    contributor_name: str | None = None


class ContributorResponse(CamelModel):
    uid: str | None = None
    name: str | None = None
    points: int = 0


class AccessoryResponse(CamelModel):
    """A group: one accessory category and the models it fits."""

    id: str
    accessory_type: str
    models: list[ModelEntryResponse] = Field(default_factory=list)
    contributor: ContributorResponse | None = None
    source: str | None = None
    last_updated: datetime | None = None


class AccessoryCreateRequest(CamelModel):
    """Manual group creation (admin)."""

    accessory_type: str = Field(..., min_length=1)
    models: list[str] = Field(..., min_length=1)
    source: str | None = None
    contributor_name: str | None = None


class AddModelRequest(CamelModel):
    name: str = Field(..., min_length=1)
    contributor_name: str | None = None


class BulkImportResponse(CamelModel):
    created: int
    merged: int
    skipped: int
    batches: int
