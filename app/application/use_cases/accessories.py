"""Accessory (compatibility group) admin use cases."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.application.dtos.accessory import AccessoryCreate, AccessoryResult
from app.domain.exceptions import ResourceNotFoundException

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IAccessoryRepository

logger = logging.getLogger(__name__)


class AccessoryService:
    """Read and maintain compatibility groups."""

    def __init__(self, accessory_repo: "IAccessoryRepository") -> None:
        self.accessory_repo = accessory_repo

    async def list_by_category(self, category: str | None = None) -> list[AccessoryResult]:
        category = (category or "").strip() or None
        return await self.accessory_repo.list_by_category(category)

    async def get(self, accessory_id: str) -> AccessoryResult:
        group = await self.accessory_repo.get_by_id(accessory_id)
        if group is None:
            raise ResourceNotFoundException("accessory", accessory_id)
        return group

    async def get_raw(self, accessory_id: str) -> dict[str, Any]:
        """Stored fields as-is, for debugging data problems."""
        data = await self.accessory_repo.get_raw(accessory_id.strip())
        if data is None:
            raise ResourceNotFoundException("document", accessory_id)
        return data

    async def create(self, data: AccessoryCreate) -> AccessoryResult:
        group = await self.accessory_repo.create(data)
        logger.info("Accessory group %s created (%s models)", group.id, len(group.models))
        return group

    async def add_model(
        self, accessory_id: str, name: str, contributor_name: str | None = None
    ) -> AccessoryResult:
        await self.accessory_repo.add_model(accessory_id, name, contributor_name)
        return await self.get(accessory_id)

    async def remove_model(self, accessory_id: str, name: str) -> AccessoryResult:
        """Remove a model by name (case-insensitive); 404 when the group does not list it."""
        removed = await self.accessory_repo.remove_model(accessory_id, name)
        if not removed:
            raise ResourceNotFoundException("model", name)
        logger.info("Removed %s entries named %r from %s", removed, name, accessory_id)
        return await self.get(accessory_id)

    async def delete(self, accessory_id: str) -> None:
        await self.accessory_repo.delete(accessory_id)
        logger.info("Accessory group %s deleted", accessory_id)
