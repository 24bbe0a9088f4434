"""Category and master model API schemas."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class CategoryCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)


class CategoryResponse(CamelModel):
    id: str
    name: str
    created_at: datetime | None = None


class MasterModelCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)


class MasterModelResponse(CamelModel):
    id: str
    name: str
    created_at: datetime | None = None


class MasterModelImportResponse(CamelModel):
    added: int
    skipped: int
