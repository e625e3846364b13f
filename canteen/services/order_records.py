"""Order Records — ticket lookup and the admin-only order mutations.

Invariants:
    - Only the printed flag is ever updated on an existing order
    - Deleting an order gives its quantity back to the worker's daily tally
      in the same transaction
    - Missing targets raise ResourceNotFoundError (nothing written)
"""

import logging

from sqlalchemy import select

from canteen.core.domain_types import DateStr, IdentityKey
from canteen.core.errors import ResourceNotFoundError
from canteen.core.identity import is_ticket_id
from canteen.infrastructure.database import DatabaseSessionManager
from canteen.models.company import Company
from canteen.models.order import Order
from canteen.services.order_ledger import SqlOrderLedger

logger = logging.getLogger(__name__)


class OrderRecords:
    """Read a ticket; flag it printed; delete it."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def get_ticket(self, ticket_id: str) -> tuple[Order, str | None]:
        """Full order plus its employer's logo URL (if the employer exists)."""
        if not is_ticket_id(ticket_id):
            raise ResourceNotFoundError("Order", ticket_id)
        async with self._db.session() as db:
            result = await db.execute(
                select(Order, Company.logo_path)
                .outerjoin(Company, Company.name == Order.company)
                .where(Order.id == ticket_id),
            )
            row = result.first()
        if row is None:
            raise ResourceNotFoundError("Order", ticket_id)
        order, logo_path = row
        return order, logo_path

    async def set_printed(self, ticket_id: str, printed: bool) -> None:
        async with self._db.session() as db:
            updated = await SqlOrderLedger(db).update_printed_flag(ticket_id, printed)
            if updated == 0:
                raise ResourceNotFoundError("Order", ticket_id)
            await db.commit()
        logger.info(
            f"Order printed flag set to {printed}", extra={"ticket_id": ticket_id},
        )

    async def delete_order(self, ticket_id: str) -> None:
        async with self._db.session() as db:
            ledger = SqlOrderLedger(db)
            order = await ledger.get(ticket_id)
            if order is None:
                raise ResourceNotFoundError("Order", ticket_id)
            await ledger.release_quantity(
                IdentityKey(order.worker_identity), DateStr(order.date_str),
                order.quantity or 1,
            )
            await ledger.delete(ticket_id)
            await db.commit()
        logger.info("Order deleted", extra={"ticket_id": ticket_id})
