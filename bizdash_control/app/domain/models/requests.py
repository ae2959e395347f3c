from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MutationRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_payload(self) -> dict:
        return self.model_dump(mode="json")


class SaleRequest(MutationRequest):
    date: dt.date
    morning: int = Field(ge=0)
    night: int = Field(ge=0)
    holiday: str = ""


class BulkSaleRequest(MutationRequest):
    sales: tuple[SaleRequest, ...] = Field(min_length=1)

    def to_payload(self) -> dict:
        return {"sales": [sale.to_payload() for sale in self.sales]}


class CategoryRequest(MutationRequest):
    name: str = Field(min_length=1, max_length=255)

    @field_validator("name", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value


class ItemRequest(MutationRequest):
    name: str = Field(min_length=1, max_length=255)
    price: float = Field(gt=0)
    description: str = Field(min_length=1)
    category: str = Field(min_length=1)

    @field_validator("name", "description", "category", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value
