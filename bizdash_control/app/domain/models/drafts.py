from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date as date_type
from typing import Any


class DraftMixin:
    """Field-by-field editing shared by every form draft."""

    editable_fields: frozenset[str] | None = None

    def update_field(self, name: str, value: Any) -> None:
        allowed = self.editable_fields or {item.name for item in fields(self)}
        if name not in allowed:
            raise ValueError(f"Unknown field '{name}' for {type(self).__name__}")
        setattr(self, name, value)

    def snapshot(self) -> dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


@dataclass
class SaleDraft(DraftMixin):
    date: date_type | None = field(default_factory=date_type.today)
    morning: int = 0
    night: int = 0
    holiday: str = ""


@dataclass
class BulkSaleRowDraft(SaleDraft):
    editable_fields = frozenset({"morning", "night", "holiday"})


@dataclass
class CategoryDraft(DraftMixin):
    name: str = ""


@dataclass
class ItemDraft(DraftMixin):
    name: str = ""
    price: float = 0
    description: str = ""
    category: str = ""
