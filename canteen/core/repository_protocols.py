"""Boundary Protocols — contracts between the engines and the store.

Invariants:
    - Engines depend on these Protocols, never on concrete SQL classes
    - Implementations are bound to one unit of work (one AsyncSession)
    - Records crossing the boundary are the concrete ORM record types

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, the pure rules that consume
      their results (quota_policy, report_rules) stay synchronous
"""

from typing import Iterable, Protocol, Sequence, TYPE_CHECKING

from canteen.core.domain_types import DateStr, IdentityKey, TicketId

if TYPE_CHECKING:
    from canteen.core.report_rules import ReportSelection
    from canteen.models.order import Order
    from canteen.models.worker import Worker


class WorkerDirectory(Protocol):
    """Read-only worker lookup consumed by intake and reports."""
    async def find_by_identity(self, key: IdentityKey) -> "Worker | None": ...
    async def cost_center_of(self, key: IdentityKey) -> str | None: ...
    async def cost_centers_for(
        self, keys: Iterable[str],
    ) -> dict[str, str | None]: ...


class OrderLedger(Protocol):
    """Append-only order store plus the per-worker-per-day tally."""
    async def sum_quantity_for(self, key: IdentityKey, date_str: DateStr) -> int: ...
    async def lock_daily_tally(self, key: IdentityKey, date_str: DateStr) -> int: ...
    async def reserve_quantity(
        self, key: IdentityKey, date_str: DateStr, quantity: int, max_daily: int,
    ) -> bool: ...
    async def release_quantity(
        self, key: IdentityKey, date_str: DateStr, quantity: int,
    ) -> None: ...
    async def append(self, order: "Order") -> TicketId: ...
    async def get(self, ticket_id: str) -> "Order | None": ...
    async def query(self, selection: "ReportSelection") -> Sequence["Order"]: ...
    async def update_printed_flag(self, ticket_id: str, printed: bool) -> int: ...
    async def delete(self, ticket_id: str) -> int: ...
