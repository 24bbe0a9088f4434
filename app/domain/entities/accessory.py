"""Accessory (compatibility group) domain entity.

A group links one accessory category to the device models it fits.
Model entries exist in two encodings in stored data: plain strings and
maps with a name (plus optional contributor tags). Readers go through
model_name() so both encodings behave the same.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.exceptions import ValidationException

ModelEntry = str | dict[str, Any]


def model_name(entry: Any) -> str:
    """Return the model name of a stored entry (plain string or {name, ...} map)."""
    if isinstance(entry, str):
        return entry
    if isinstance(entry, dict):
        name = entry.get("name")
        return name if isinstance(name, str) else ""
    return ""


def clean_model_names(names: Iterable[str]) -> list[str]:
    """Strip names, drop blanks and case-insensitive repeats; first spelling wins."""
    seen: set[str] = set()
    cleaned: list[str] = []
    for raw in names:
        name = raw.strip() if isinstance(raw, str) else ""
        if not name or name.lower() in seen:
            continue
        seen.add(name.lower())
        cleaned.append(name)
    return cleaned


def new_model_names(existing: Iterable[Any], submitted: Iterable[str]) -> list[str]:
    """Submitted names not already present in existing entries (case-insensitive).

    Keeps submission order and drops repeats within submitted.
    """
    present = {model_name(e).strip().lower() for e in existing}
    return [n for n in clean_model_names(submitted) if n.lower() not in present]


@dataclass
class AccessoryEntity:
    """Domain entity for a compatibility group.

    models keeps stored entries untouched; merging only ever appends.
    """

    id: str
    accessory_type: str
    models: list[ModelEntry] = field(default_factory=list)
    contributor: dict[str, Any] | None = None
    source: str | None = None
    last_updated: datetime | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate group rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Accessory ID is required", field="id")
        if not isinstance(self.models, list):
            raise ValidationException("models must be a list", field="models")

    def model_names(self) -> list[str]:
        """Names of every entry, in stored order, blanks skipped."""
        return [n for n in (model_name(e) for e in self.models) if n]

    def matching_models(self, term: str) -> list[str]:
        """Model names containing term (case-insensitive substring)."""
        needle = term.strip().lower()
        if not needle:
            return []
        return [n for n in self.model_names() if needle in n.lower()]

    def has_model(self, name: str) -> bool:
        target = name.strip().lower()
        return any(n.strip().lower() == target for n in self.model_names())

    def entries_without(self, name: str) -> list[ModelEntry]:
        """Entries left after removing every entry whose name equals name (case-insensitive)."""
        target = name.strip().lower()
        return [e for e in self.models if model_name(e).strip().lower() != target]
