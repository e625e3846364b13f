"""Service test fixtures — async DB, pinned clock, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The app reads db_manager and clock from app.state, so the client fixture
      installs the test ones there (lifespan is not run by ASGITransport)
    - The clock is pinned to 2026-07-15 12:00 in America/Santiago

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for service
      and route tests; the concurrency test uses a temporary file database
"""

from datetime import datetime, timezone
from itertools import count

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from canteen.core.business_calendar import business_zone
from canteen.core.clock import FixedClock
from canteen.core.domain_types import Tier
from canteen.infrastructure.database import DatabaseSessionManager, build_engine
from canteen.main import app
from canteen.models.company import Company
from canteen.models.order import Order
from canteen.models.worker import Worker

NOON_LOCAL = datetime(2026, 7, 15, 16, 0, tzinfo=timezone.utc)


@pytest.fixture
async def db_manager():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    manager = DatabaseSessionManager.from_engine(engine)
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
def clock():
    return FixedClock(NOON_LOCAL)


@pytest.fixture
def zone():
    return business_zone("America/Santiago")


@pytest.fixture
def add_worker(db_manager):
    """Insert a worker directly; returns the stored row."""

    async def _add(
        identity: str, name: str = "ANA PEREZ", company: str = "ACME",
        tier: Tier = Tier.NORMAL, cost_center: str | None = None,
    ) -> Worker:
        worker = Worker(
            identity_key=identity, name=name, company=company,
            tier=tier.value, cost_center=cost_center,
        )
        async with db_manager.session() as db:
            db.add(worker)
            await db.commit()
        return worker

    return _add


@pytest.fixture
def add_company(db_manager):

    async def _add(name: str, logo_path: str | None = None) -> Company:
        company = Company(name=name, logo_path=logo_path)
        async with db_manager.session() as db:
            db.add(company)
            await db.commit()
        return company

    return _add


@pytest.fixture
def add_order(db_manager):
    """Insert an order row without going through intake (report fixtures)."""
    seq = count(1)

    async def _add(
        worker_identity: str, date_str: str, company: str = "ACME",
        quantity: int = 1, created_at: datetime | None = None,
        order_id: str | None = None,
    ) -> Order:
        n = next(seq)
        order = Order(
            id=order_id or f"T{n:07d}",
            worker_identity=worker_identity,
            worker_name=f"WORKER {worker_identity}",
            company=company,
            fulfillment_mode="DINE_IN",
            meal_slot="LUNCH",
            quantity=quantity,
            date_str=date_str,
            pickup_name=f"WORKER {worker_identity}",
            printed=False,
            created_at=created_at or datetime(
                int(date_str[:4]), int(date_str[5:7]), int(date_str[8:10]),
                12, 0, n % 60, tzinfo=timezone.utc,
            ),
        )
        async with db_manager.session() as db:
            db.add(order)
            await db.commit()
        return order

    return _add


@pytest.fixture
def count_orders(db_manager):

    async def _count() -> int:
        async with db_manager.session() as db:
            result = await db.execute(select(func.count()).select_from(Order))
            return result.scalar_one()

    return _count


@pytest.fixture
async def client(db_manager, clock):
    """FastAPI test client wired to the test database and clock."""
    app.state.db_manager = db_manager
    app.state.clock = clock
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    del app.state.db_manager
    del app.state.clock


@pytest.fixture
async def admin_headers(client):
    """Bearer header for an admin session (login cookie dropped from the jar)."""
    res = await client.post("/api/v1/auth/login", json={"pin": "4321"})
    assert res.status_code == 200
    client.cookies.clear()
    return {"Authorization": f"Bearer {res.json()['token']}"}
