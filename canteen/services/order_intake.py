"""Order Intake Engine — identity lookup, quota admission, ticket issuance.

Invariants:
    - Identity is normalized before lookup (core/identity.py)
    - The calendar day comes from the business zone, never UTC
    - Steps lock-tally -> decide -> reserve -> append -> commit run in ONE
      transaction; the tally row lock serializes same-worker same-day requests
    - Rejections (unknown worker, quota, bad parameters) write nothing
    - A ticket id collision regenerates the id once; a second collision is fatal
    - Exactly one order row per successful call

Design Decisions:
    - Store adapters injected as factories over the unit-of-work session, so
      the engine only sees the WorkerDirectory / OrderLedger protocols
"""

import logging
from dataclasses import dataclass, field
from typing import Callable
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from canteen.core.business_calendar import local_date_str, local_time_str
from canteen.core.clock import Clock, SystemClock
from canteen.core.domain_types import (
    FulfillmentMode, MealSlot, Tier, TicketId, PICKUP_TIME_SLOTS,
)
from canteen.core.errors import (
    ErrorContext, InvalidParametersError, QuotaExceededError,
    TicketCollisionError, WorkerNotFoundError,
)
from canteen.core.identity import generate_ticket_id, normalize_identity_key
from canteen.core.quota_policy import DEFAULT_LIMITS, QuotaLimits, admissible
from canteen.core.repository_protocols import OrderLedger, WorkerDirectory
from canteen.infrastructure.database import DatabaseSessionManager
from canteen.models.order import Order
from canteen.services.order_ledger import SqlOrderLedger
from canteen.services.worker_directory import SqlWorkerDirectory

logger = logging.getLogger(__name__)

MAX_TICKET_ATTEMPTS = 2


@dataclass(frozen=True)
class OrderIntent:
    """What the caller asked for, before defaults and clamping."""
    identity: str
    fulfillment_mode: FulfillmentMode
    meal_slot: MealSlot | None = None
    quantity: int | None = None
    pickup_time: str | None = None
    pickup_name: str | None = None
    guest_names: list[str] = field(default_factory=list)
    detail: str | None = None
    signature: str | None = None


@dataclass(frozen=True)
class Ticket:
    """Summary returned right after admission."""
    id: TicketId
    worker_name: str
    company: str
    fulfillment_mode: FulfillmentMode
    meal_slot: MealSlot
    quantity: int
    date: str
    time: str
    tier: Tier

    @property
    def is_premium(self) -> bool:
        return self.tier == Tier.PREMIUM


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class OrderIntakeEngine:
    """Admits or rejects meal orders against the daily quota."""

    def __init__(
        self,
        db_manager: DatabaseSessionManager,
        zone: ZoneInfo,
        limits: QuotaLimits = DEFAULT_LIMITS,
        clock: Clock | None = None,
        ticket_ids: Callable[[], TicketId] = generate_ticket_id,
        directory_factory: Callable[[AsyncSession], WorkerDirectory] = SqlWorkerDirectory,
        ledger_factory: Callable[[AsyncSession], OrderLedger] = SqlOrderLedger,
    ):
        self._db = db_manager
        self._zone = zone
        self._limits = limits
        self._clock = clock or SystemClock()
        self._ticket_ids = ticket_ids
        self._directory_factory = directory_factory
        self._ledger_factory = ledger_factory

    async def submit_order(self, intent: OrderIntent) -> Ticket:
        """Admit one order or raise a typed CanteenError."""
        key = normalize_identity_key(intent.identity or "")
        if not key:
            raise InvalidParametersError("Identity is required", field="identity")
        if intent.pickup_time and intent.pickup_time not in PICKUP_TIME_SLOTS:
            raise InvalidParametersError(
                f"Pickup time must be one of {PICKUP_TIME_SLOTS[0]}..{PICKUP_TIME_SLOTS[-1]} "
                "on the half hour",
                field="pickup_time",
            )

        now = self._clock.now()
        date_str = local_date_str(now, self._zone)
        ctx = ErrorContext(identity_key=key, date_str=date_str)

        async with self._db.session() as db:
            directory = self._directory_factory(db)
            ledger = self._ledger_factory(db)

            worker = await directory.find_by_identity(key)
            if worker is None:
                logger.info("Order rejected: unknown worker", extra={"identity_key": key})
                raise WorkerNotFoundError(key, ctx)
            tier = worker.tier_enum

            already = await ledger.lock_daily_tally(key, date_str)
            decision = admissible(tier, already, intent.quantity, self._limits)
            if not decision.accepted:
                logger.info(
                    "Order rejected: quota exceeded",
                    extra={"identity_key": key, "date_str": date_str,
                           "quantity": decision.quantity},
                )
                raise QuotaExceededError(decision.max_daily, already, ctx)

            reserved = await ledger.reserve_quantity(
                key, date_str, decision.quantity, decision.max_daily,
            )
            if not reserved:
                current = await ledger.lock_daily_tally(key, date_str)
                raise QuotaExceededError(decision.max_daily, current, ctx)

            meal_slot = intent.meal_slot or MealSlot.LUNCH
            guests = [g.strip() for g in intent.guest_names if g and g.strip()]
            fields = dict(
                worker_identity=key,
                worker_name=worker.name,
                company=worker.company,
                fulfillment_mode=intent.fulfillment_mode.value,
                meal_slot=meal_slot.value,
                quantity=decision.quantity,
                date_str=date_str,
                pickup_time=intent.pickup_time or None,
                pickup_name=(_clean(intent.pickup_name) or worker.name.strip()).upper(),
                guest_names=guests if decision.quantity > 1 and guests else None,
                order_detail=_clean(intent.detail),
                signature=intent.signature or None,
                printed=False,
                created_at=now,
            )
            order = await self._append_with_retry(ledger, fields)
            await db.commit()

        logger.info(
            "Order admitted",
            extra={"ticket_id": order.id, "identity_key": key,
                   "date_str": date_str, "quantity": order.quantity},
        )
        return Ticket(
            id=TicketId(order.id),
            worker_name=worker.name,
            company=worker.company,
            fulfillment_mode=intent.fulfillment_mode,
            meal_slot=meal_slot,
            quantity=decision.quantity,
            date=date_str,
            time=local_time_str(now, self._zone),
            tier=tier,
        )

    async def _append_with_retry(self, ledger: OrderLedger, fields: dict) -> Order:
        for attempt in range(1, MAX_TICKET_ATTEMPTS + 1):
            order = Order(id=self._ticket_ids(), **fields)
            try:
                await ledger.append(order)
                return order
            except TicketCollisionError:
                logger.warning(
                    "Ticket id collision, regenerating",
                    extra={"ticket_id": order.id, "attempt": attempt},
                )
        raise TicketCollisionError(attempts=MAX_TICKET_ATTEMPTS)
