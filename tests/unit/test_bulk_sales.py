from datetime import date

import pytest

from bizdash_control.app.application.bulk_sales import BulkSaleBatch


def test_from_range_builds_one_row_per_day() -> None:
    batch = BulkSaleBatch.from_range(date(2024, 5, 1), date(2024, 5, 3))

    assert [draft.date for draft in batch.drafts()] == [date(2024, 5, 1), date(2024, 5, 2), date(2024, 5, 3)]
    with pytest.raises(ValueError):
        BulkSaleBatch.from_range(date(2024, 5, 3), date(2024, 5, 1))


def test_update_field_rejects_date_and_unknown_fields() -> None:
    batch = BulkSaleBatch.from_range(date(2024, 5, 1), date(2024, 5, 1))

    batch.update_field(0, "morning", 12)
    assert batch.drafts()[0].morning == 12

    with pytest.raises(ValueError):
        batch.update_field(0, "date", date(2024, 1, 1))
    with pytest.raises(ValueError):
        batch.update_field(0, "price", 3)
    with pytest.raises(IndexError):
        batch.update_field(5, "night", 1)


def test_removal_renumbers_rows_and_controllers_follow_their_row() -> None:
    batch = BulkSaleBatch.from_range(date(2024, 5, 1), date(2024, 5, 3))
    first = batch.row_controller(0)
    third = batch.row_controller(2)

    first.remove()
    third.update_field("night", 40)

    assert len(batch) == 2
    assert third.index == 1
    assert batch.drafts()[1].night == 40
    assert batch.drafts()[1].date == date(2024, 5, 3)
    with pytest.raises(LookupError):
        first.update_field("night", 1)


@pytest.mark.anyio
async def test_bulk_submit_posts_all_rows_once(dashboard, fake_api) -> None:
    fake_api.respond("POST", "/api/sales/bulk", 201)
    form = dashboard.bulk_sale_form(date(2024, 5, 1), date(2024, 5, 2))
    form.update_field(0, "morning", 10)
    form.update_field(0, "night", 5)
    form.update_field(1, "morning", 7)
    form.update_field(1, "holiday", "Cinco de Mayo")

    outcome = await form.submit()

    assert outcome.ok is True
    assert fake_api.calls("POST", "/api/sales/bulk") == 1
    assert fake_api.bodies() == [
        {
            "sales": [
                {"date": "2024-05-01", "morning": 10, "night": 5, "holiday": ""},
                {"date": "2024-05-02", "morning": 7, "night": 0, "holiday": "Cinco de Mayo"},
            ]
        }
    ]
    assert dashboard.notifier.last.description == "2 sales added successfully"
    assert len(form.draft) == 0


@pytest.mark.anyio
async def test_bulk_submit_with_invalid_row_sends_nothing(dashboard, fake_api) -> None:
    form = dashboard.bulk_sale_form(date(2024, 5, 1), date(2024, 5, 2))
    form.update_field(1, "morning", -3)

    assert await form.submit() is None
    assert fake_api.requests == []


@pytest.mark.anyio
async def test_bulk_submit_after_removing_every_row_sends_nothing(dashboard, fake_api) -> None:
    form = dashboard.bulk_sale_form(date(2024, 5, 1), date(2024, 5, 1))
    form.remove_row(0)

    assert await form.submit() is None
    assert fake_api.requests == []
