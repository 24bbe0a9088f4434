"""Application services: CSV parsing for bulk imports."""

from app.application.services.csv_parsing import (
    decode_upload,
    parse_accessory_csv,
    parse_master_model_csv,
)

__all__ = [
    "decode_upload",
    "parse_accessory_csv",
    "parse_master_model_csv",
]
