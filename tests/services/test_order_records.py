"""Order Records — ticket lookup, printed flag, deletion with quota release."""

import pytest

from canteen.core.domain_types import FulfillmentMode
from canteen.core.errors import QuotaExceededError, ResourceNotFoundError
from canteen.services.order_intake import OrderIntakeEngine, OrderIntent
from canteen.services.order_records import OrderRecords


@pytest.fixture
def records(db_manager):
    return OrderRecords(db_manager)


@pytest.fixture
def intake(db_manager, zone, clock):
    return OrderIntakeEngine(db_manager, zone, clock=clock)


async def test_ticket_joined_with_employer_logo(records, add_company, add_order):
    await add_company("ACME", logo_path="https://cdn.example.com/acme.png")
    order = await add_order("W1", "2026-07-15", company="ACME")
    stored, logo = await records.get_ticket(order.id)
    assert stored.id == order.id
    assert logo == "https://cdn.example.com/acme.png"


async def test_ticket_without_employer_record(records, add_order):
    order = await add_order("W1", "2026-07-15", company="NOBODY")
    _, logo = await records.get_ticket(order.id)
    assert logo is None


async def test_missing_ticket(records):
    with pytest.raises(ResourceNotFoundError):
        await records.get_ticket("ZZZZZZZZ")


async def test_set_printed_round_trip(records, add_order):
    order = await add_order("W1", "2026-07-15")
    await records.set_printed(order.id, True)
    stored, _ = await records.get_ticket(order.id)
    assert stored.printed is True
    await records.set_printed(order.id, False)
    stored, _ = await records.get_ticket(order.id)
    assert stored.printed is False


async def test_set_printed_missing_order(records):
    with pytest.raises(ResourceNotFoundError):
        await records.set_printed("ZZZZZZZZ", True)


async def test_delete_releases_daily_quota(records, intake, add_worker, count_orders):
    await add_worker("1")
    intent = OrderIntent(identity="1", fulfillment_mode=FulfillmentMode.DINE_IN)
    ticket = await intake.submit_order(intent)
    with pytest.raises(QuotaExceededError):
        await intake.submit_order(intent)

    await records.delete_order(ticket.id)
    assert await count_orders() == 0

    again = await intake.submit_order(intent)
    assert again.quantity == 1


async def test_delete_missing_order(records):
    with pytest.raises(ResourceNotFoundError):
        await records.delete_order("ZZZZZZZZ")
