from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from bizdash_control.app.domain.models.drafts import CategoryDraft, ItemDraft, SaleDraft
from bizdash_control.app.domain.models.requests import (
    BulkSaleRequest,
    CategoryRequest,
    ItemRequest,
    MutationRequest,
    SaleRequest,
)

RequestT = TypeVar("RequestT", bound=MutationRequest)

REQUIRED_MESSAGES = {
    "date": "Date is required.",
    "morning": "Morning must be a whole number of 0 or more.",
    "night": "Night must be a whole number of 0 or more.",
    "name": "Name is required.",
    "price": "Price must be greater than 0.",
    "description": "Description is required.",
    "category": "Category is required.",
    "sales": "Add at least one sale.",
}


class FormStatus(str, Enum):
    IDLE = "idle"
    DIRTY = "dirty"
    VALID = "valid"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class FormResult(Generic[RequestT]):
    values: dict[str, Any]
    field_errors: dict[str, str]
    request: RequestT | None = None

    @property
    def first_invalid_field(self) -> str | None:
        return next(iter(self.field_errors), None)

    @property
    def is_valid(self) -> bool:
        return len(self.field_errors) == 0 and self.request is not None


@dataclass
class FormState:
    status: FormStatus = FormStatus.IDLE
    submit_enabled: bool = False
    submit_disabled_reason: str = "Fill in the required fields."
    field_errors: dict[str, str] = field(default_factory=dict)


def _field_errors(error: ValidationError) -> dict[str, str]:
    mapped: dict[str, str] = {}
    for item in error.errors():
        loc = item.get("loc") or ("form",)
        name = str(loc[0])
        if len(loc) > 2 and name == "sales":
            name = f"sales.{loc[1]}.{loc[2]}"
            mapped.setdefault(name, REQUIRED_MESSAGES.get(str(loc[2]), item.get("msg", "Invalid value")))
            continue
        mapped.setdefault(name, REQUIRED_MESSAGES.get(name, item.get("msg", "Invalid value")))
    return mapped


def _validate(model: type[RequestT], values: dict[str, Any]) -> FormResult[RequestT]:
    try:
        request = model.model_validate(values)
    except ValidationError as error:
        return FormResult(values=values, field_errors=_field_errors(error))
    return FormResult(values=request.model_dump(), field_errors={}, request=request)


def validate_sale_draft(draft: SaleDraft) -> FormResult[SaleRequest]:
    return _validate(SaleRequest, draft.snapshot())


def validate_category_draft(draft: CategoryDraft) -> FormResult[CategoryRequest]:
    return _validate(CategoryRequest, draft.snapshot())


def validate_item_draft(draft: ItemDraft) -> FormResult[ItemRequest]:
    return _validate(ItemRequest, draft.snapshot())


def validate_bulk_sale_drafts(drafts: Sequence[SaleDraft]) -> FormResult[BulkSaleRequest]:
    return _validate(BulkSaleRequest, {"sales": [draft.snapshot() for draft in drafts]})


def build_form_state(result: FormResult) -> FormState:
    if result.is_valid:
        return FormState(status=FormStatus.VALID, submit_enabled=True, submit_disabled_reason="")

    first_invalid_field = result.first_invalid_field or "form"
    return FormState(
        status=FormStatus.DIRTY,
        submit_enabled=False,
        submit_disabled_reason=f"Fix '{first_invalid_field}' before submitting.",
        field_errors=dict(result.field_errors),
    )


def map_api_validation_errors(error_details: Any) -> dict[str, str]:
    if not error_details:
        return {}

    mapped: dict[str, str] = {}
    if isinstance(error_details, dict):
        if isinstance(error_details.get("errors"), dict):
            for key, value in error_details["errors"].items():
                mapped[str(key)] = str(value)
        elif isinstance(error_details.get("errors"), list):
            mapped.update(map_api_validation_errors(error_details["errors"]))
        for key, value in error_details.items():
            if key == "errors":
                continue
            if isinstance(value, str):
                mapped[str(key)] = value
            elif isinstance(value, list) and value and isinstance(value[0], str):
                mapped[str(key)] = value[0]
    elif isinstance(error_details, list):
        for item in error_details:
            if not isinstance(item, dict):
                continue
            field_name = item.get("field") or item.get("loc")
            message = item.get("message") or item.get("msg")
            if isinstance(field_name, list):
                field_name = field_name[-1] if field_name else None
            if field_name and message:
                mapped[str(field_name)] = str(message)
    return mapped
