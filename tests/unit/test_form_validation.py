from datetime import date

from bizdash_control.app.domain.models.drafts import BulkSaleRowDraft, CategoryDraft, ItemDraft, SaleDraft
from bizdash_control.app.ui.formatting import format_long_date
from bizdash_control.app.ui.forms import (
    FormStatus,
    build_form_state,
    map_api_validation_errors,
    validate_bulk_sale_drafts,
    validate_category_draft,
    validate_item_draft,
    validate_sale_draft,
)


def test_sale_draft_becomes_request_with_identical_values() -> None:
    draft = SaleDraft(date=date(2024, 5, 1), morning=100, night=50, holiday="")

    result = validate_sale_draft(draft)

    assert result.is_valid is True
    assert result.request.to_payload() == {"date": "2024-05-01", "morning": 100, "night": 50, "holiday": ""}


def test_sale_draft_requires_date_and_non_negative_counts() -> None:
    result = validate_sale_draft(SaleDraft(date=None, morning=-1, night=3))

    assert result.is_valid is False
    assert result.field_errors["date"] == "Date is required."
    assert "morning" in result.field_errors
    assert "night" not in result.field_errors


def test_category_name_is_trimmed_and_required() -> None:
    assert validate_category_draft(CategoryDraft(name="   ")).is_valid is False

    result = validate_category_draft(CategoryDraft(name="  Drinks "))
    assert result.request.name == "Drinks"


def test_item_requires_name_price_and_description() -> None:
    result = validate_item_draft(ItemDraft(name="", price=10, description="x", category="Drinks"))

    assert result.is_valid is False
    assert result.first_invalid_field == "name"

    zero_price = validate_item_draft(ItemDraft(name="Tea", price=0, description="x", category="Drinks"))
    assert zero_price.field_errors == {"price": "Price must be greater than 0."}


def test_bulk_drafts_report_row_errors() -> None:
    rows = [
        BulkSaleRowDraft(date=date(2024, 5, 1), morning=1, night=2),
        BulkSaleRowDraft(date=date(2024, 5, 2), morning=-4, night=2),
    ]

    result = validate_bulk_sale_drafts(rows)

    assert result.is_valid is False
    assert "sales.1.morning" in result.field_errors


def test_empty_bulk_batch_is_invalid() -> None:
    result = validate_bulk_sale_drafts([])

    assert result.field_errors == {"sales": "Add at least one sale."}


def test_build_form_state_blocks_submit_when_invalid() -> None:
    state = build_form_state(validate_category_draft(CategoryDraft(name="")))

    assert state.status == FormStatus.DIRTY
    assert state.submit_enabled is False
    assert "name" in state.submit_disabled_reason


def test_map_api_validation_errors_handles_backend_422_shapes() -> None:
    details = {
        "errors": [
            {"field": "price", "message": "too high"},
            {"loc": ["body", "name"], "msg": "already exists"},
        ],
        "category": ["unknown category"],
    }

    mapped = map_api_validation_errors(details)

    assert mapped == {"price": "too high", "name": "already exists", "category": "unknown category"}


def test_format_long_date_uses_ordinal_day() -> None:
    assert format_long_date(date(2024, 5, 1)) == "May 1st, 2024"
    assert format_long_date(date(2024, 6, 12)) == "June 12th, 2024"
    assert format_long_date(date(2024, 3, 22)) == "March 22nd, 2024"
    assert format_long_date(date(2024, 8, 23)) == "August 23rd, 2024"


def test_format_long_date_ignores_process_locale() -> None:
    class _LocalizedDate(date):
        def strftime(self, fmt):
            return "mai"

    assert format_long_date(_LocalizedDate(2024, 5, 1)) == "May 1st, 2024"
    assert format_long_date(date(2024, 12, 31)) == "December 31st, 2024"
