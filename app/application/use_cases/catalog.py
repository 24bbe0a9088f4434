"""Admin-maintained reference data: categories and master models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.application.dtos.catalog import CategoryResult, MasterModelResult

if TYPE_CHECKING:
    from app.application.interfaces.repositories import (
        ICategoryRepository,
        IMasterModelRepository,
    )


class CatalogService:
    """Categories and master models (public lists, admin writes)."""

    def __init__(
        self,
        category_repo: "ICategoryRepository",
        master_model_repo: "IMasterModelRepository",
    ) -> None:
        self.category_repo = category_repo
        self.master_model_repo = master_model_repo

    async def list_categories(self) -> list[CategoryResult]:
        return await self.category_repo.list_all()

    async def add_category(self, name: str) -> CategoryResult:
        return await self.category_repo.add(name)

    async def delete_category(self, category_id: str) -> None:
        await self.category_repo.delete(category_id)

    async def list_master_models(self) -> list[MasterModelResult]:
        return await self.master_model_repo.list_all()

    async def add_master_model(self, name: str) -> MasterModelResult:
        return await self.master_model_repo.add(name)

    async def delete_master_model(self, model_id: str) -> None:
        await self.master_model_repo.delete(model_id)
