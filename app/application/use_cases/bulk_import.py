"""CSV bulk import use cases for accessories and master models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.application.dtos.bulk_import import BulkImportResult, MasterModelImportResult
from app.application.services.csv_parsing import (
    decode_upload,
    parse_accessory_csv,
    parse_master_model_csv,
)
from app.domain.exceptions import ValidationException
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.application.interfaces.repositories import (
        IBulkAccessoryWriter,
        IMasterModelRepository,
    )

logger = get_logger(__name__)


class BulkImportService:
    """Parse uploaded CSV files and hand the rows to batched writers."""

    def __init__(
        self,
        accessory_writer: "IBulkAccessoryWriter",
        master_model_repo: "IMasterModelRepository",
        batch_size: int = 500,
    ) -> None:
        self.accessory_writer = accessory_writer
        self.master_model_repo = master_model_repo
        self.batch_size = batch_size

    @traced("bulk_import.accessories")
    async def import_accessories(self, content: bytes) -> BulkImportResult:
        """Import accessory groups from CSV bytes.

        Raises:
            ValidationException: Not UTF-8, no ``model`` column, or no usable rows.
        """
        parsed = parse_accessory_csv(decode_upload(content))
        if not parsed.rows:
            raise ValidationException("CSV contains no rows with models", field="file")
        add_span_attributes(rows=len(parsed.rows), skipped=parsed.skipped)
        return await self.accessory_writer.write(
            parsed.rows, self.batch_size, skipped=parsed.skipped
        )

    @traced("bulk_import.master_models")
    async def import_master_models(self, content: bytes) -> MasterModelImportResult:
        """Add master models from CSV bytes; blank and existing names are skipped."""
        names, rows = parse_master_model_csv(decode_upload(content))
        added = await self.master_model_repo.add_many(names) if names else 0
        logger.info("Master model import: %s rows, %s added", rows, added)
        return MasterModelImportResult(added=added, skipped=rows - added)
