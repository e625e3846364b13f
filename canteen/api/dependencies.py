"""API Dependencies — per-request wiring of engines and the admin gate.

Invariants:
    - The DatabaseSessionManager comes from app.state (set in the lifespan),
      never from a module-level global
    - An optional app.state.clock overrides the system clock (tests)
    - require_admin verifies before the route body runs: an unauthorized
      privileged call has no side effect
"""

from fastapi import Depends, Request

from canteen.config import Settings, get_settings
from canteen.core.business_calendar import business_zone
from canteen.core.clock import Clock, SystemClock
from canteen.core.errors import StorageUnavailableError, UnauthorizedError
from canteen.infrastructure.database import DatabaseSessionManager
from canteen.services.directory_admin import CompanyAdmin, DisplaySettings, WorkerAdmin
from canteen.services.order_intake import OrderIntakeEngine
from canteen.services.order_records import OrderRecords
from canteen.services.report_engine import ReportEngine
from canteen.services.session_gate import SessionGate

SESSION_COOKIE = "admin_session"


def get_db_manager(request: Request) -> DatabaseSessionManager:
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise StorageUnavailableError("Database not initialized", "connect")
    return manager


def get_clock(request: Request) -> Clock:
    return getattr(request.app.state, "clock", None) or SystemClock()


def get_intake_engine(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
) -> OrderIntakeEngine:
    return OrderIntakeEngine(
        db_manager,
        business_zone(settings.business_timezone),
        limits=settings.quota_limits,
        clock=clock,
    )


def get_report_engine(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
) -> ReportEngine:
    return ReportEngine(db_manager, business_zone(settings.business_timezone), clock=clock)


def get_order_records(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
) -> OrderRecords:
    return OrderRecords(db_manager)


def get_worker_admin(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
) -> WorkerAdmin:
    return WorkerAdmin(db_manager)


def get_company_admin(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
) -> CompanyAdmin:
    return CompanyAdmin(db_manager)


def get_display_settings(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
) -> DisplaySettings:
    return DisplaySettings(db_manager)


def get_session_gate(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
) -> SessionGate:
    return SessionGate(db_manager, ttl_seconds=settings.session_ttl_seconds, clock=clock)


def presented_token(request: Request) -> str | None:
    """Token from the session cookie, else from an Authorization: Bearer header."""
    token = request.cookies.get(SESSION_COOKIE)
    if token:
        return token
    header = request.headers.get("authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


async def require_admin(
    request: Request, gate: SessionGate = Depends(get_session_gate),
) -> None:
    if not await gate.verify(presented_token(request)):
        raise UnauthorizedError()
