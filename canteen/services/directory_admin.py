"""Directory Admin — worker, company and display-setting management.

Invariants:
    - Worker identity keys are normalized on write and never changed afterwards
    - Employer names are stored trimmed and upper-cased
    - Blank cost centers are stored as NULL
    - Duplicate identity / company name -> ConflictError, nothing written
    - Deleting a company deletes the workers employed by it; historical orders
      keep their denormalized employer name
"""

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from canteen.core.domain_types import Tier
from canteen.core.errors import (
    ConflictError, InvalidParametersError, ResourceNotFoundError,
)
from canteen.core.identity import normalize_identity_key
from canteen.infrastructure.database import DatabaseSessionManager
from canteen.models.company import Company
from canteen.models.setting import Setting
from canteen.models.worker import Worker

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_SETTINGS = {
    "restaurant_name": "CANTEEN",
    "restaurant_logo": None,
}


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class WorkerAdmin:
    """CRUD over the worker directory."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def list_workers(self) -> list[Worker]:
        async with self._db.session() as db:
            result = await db.execute(select(Worker).order_by(Worker.name.asc()))
            return list(result.scalars().all())

    async def create_worker(
        self,
        identity: str,
        name: str,
        company: str,
        cost_center: str | None = None,
        tier: Tier = Tier.NORMAL,
    ) -> Worker:
        key = normalize_identity_key(identity)
        if not key or not name.strip() or not company.strip():
            raise InvalidParametersError("Identity, name and company are required")
        worker = Worker(
            identity_key=key,
            name=name.strip(),
            company=company.strip().upper(),
            cost_center=_blank_to_none(cost_center),
            tier=tier.value,
        )
        async with self._db.session() as db:
            db.add(worker)
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                raise ConflictError(f"Identity {key} is already registered")
        logger.info("Worker created", extra={"identity_key": key})
        return worker

    async def update_worker(self, worker_id: int, changes: dict[str, Any]) -> Worker:
        """Apply only the supplied fields (name, company, cost_center, tier)."""
        async with self._db.session() as db:
            worker = await db.get(Worker, worker_id)
            if worker is None:
                raise ResourceNotFoundError("Worker", str(worker_id))
            for field in ("name", "company"):
                if changes.get(field) is not None and not changes[field].strip():
                    raise InvalidParametersError(f"{field} cannot be blank", field=field)
            if changes.get("name") is not None:
                worker.name = changes["name"].strip()
            if changes.get("company") is not None:
                worker.company = changes["company"].strip().upper()
            if "cost_center" in changes:
                worker.cost_center = _blank_to_none(changes["cost_center"])
            if changes.get("tier") is not None:
                worker.tier = Tier(changes["tier"]).value
            await db.commit()
        logger.info("Worker updated", extra={"identity_key": worker.identity_key})
        return worker

    async def delete_workers(self, worker_ids: list[int]) -> int:
        if not worker_ids:
            raise InvalidParametersError("No valid ids provided", field="ids")
        async with self._db.session() as db:
            result = await db.execute(delete(Worker).where(Worker.id.in_(worker_ids)))
            await db.commit()
        logger.info(f"{result.rowcount} worker(s) deleted")
        return result.rowcount


class CompanyAdmin:
    """CRUD over employers."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def list_companies(self) -> list[Company]:
        async with self._db.session() as db:
            result = await db.execute(select(Company).order_by(Company.name.asc()))
            return list(result.scalars().all())

    async def create_company(self, name: str, **fields: str | None) -> Company:
        cleaned = name.strip().upper()
        if not cleaned:
            raise InvalidParametersError("Name is required", field="name")
        company = Company(
            name=cleaned, **{k: _blank_to_none(v) for k, v in fields.items()},
        )
        async with self._db.session() as db:
            db.add(company)
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                raise ConflictError(f"Company {cleaned} already exists")
        logger.info(f"Company {cleaned} created")
        return company

    async def update_company(
        self, company_id: int, name: str | None = None, **fields: str | None,
    ) -> Company:
        async with self._db.session() as db:
            company = await db.get(Company, company_id)
            if company is None:
                raise ResourceNotFoundError("Company", str(company_id))
            new_name = company.name
            if name is not None:
                new_name = name.strip().upper()
                if not new_name:
                    raise InvalidParametersError("Name cannot be blank", field="name")
                company.name = new_name
            for key, value in fields.items():
                if value is not None:
                    setattr(company, key, _blank_to_none(value))
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                raise ConflictError(f"Company {new_name} already exists")
        return company

    async def delete_company(self, company_id: int) -> int:
        """Delete the company and its workers. Returns removed worker count."""
        async with self._db.session() as db:
            company = await db.get(Company, company_id)
            if company is None:
                raise ResourceNotFoundError("Company", str(company_id))
            result = await db.execute(
                delete(Worker).where(Worker.company == company.name),
            )
            await db.delete(company)
            await db.commit()
        logger.info(
            f"Company {company.name} deleted with {result.rowcount} worker(s)",
        )
        return result.rowcount


class DisplaySettings:
    """Key/value display settings with defaults for unset keys."""

    def __init__(self, db_manager: DatabaseSessionManager):
        self._db = db_manager

    async def get_all(self) -> dict[str, str | None]:
        async with self._db.session() as db:
            result = await db.execute(select(Setting.key, Setting.value))
            stored = dict(result.tuples().all())
        return {**DEFAULT_DISPLAY_SETTINGS, **stored}

    async def update(self, values: dict[str, str]) -> dict[str, str | None]:
        async with self._db.session() as db:
            for key, value in values.items():
                setting = await db.get(Setting, key)
                if setting is None:
                    db.add(Setting(key=key, value=value))
                else:
                    setting.value = value
            await db.commit()
        return await self.get_all()
