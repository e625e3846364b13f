"""Directory Schemas — workers and companies.

Invariants:
    - WorkerUpdate has no identity field: identity keys are immutable
    - Required text fields are stripped and must stay non-empty
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from canteen.core.domain_types import Tier


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("cannot be empty or whitespace")
    return v


class WorkerCreate(BaseModel):
    identity: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=200)
    company: str = Field(min_length=1, max_length=200)
    cost_center: str | None = Field(None, max_length=200)
    tier: Tier = Tier.NORMAL

    @field_validator("identity", "name", "company")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return _strip_required(v)


class WorkerUpdate(BaseModel):
    """Partial update; omitted fields are left untouched."""
    name: str | None = Field(None, min_length=1, max_length=200)
    company: str | None = Field(None, min_length=1, max_length=200)
    cost_center: str | None = Field(None, max_length=200)
    tier: Tier | None = None

    @field_validator("name", "company")
    @classmethod
    def strip_supplied(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)


class WorkerResponse(BaseModel):
    id: int
    identity_key: str
    name: str
    company: str
    cost_center: str | None = None
    tier: Tier
    created_at: datetime

    model_config = {"from_attributes": True}


class CompanyFields(BaseModel):
    tax_id: str | None = Field(None, max_length=32)
    address: str | None = Field(None, max_length=300)
    contact_name: str | None = Field(None, max_length=200)
    contact_email: str | None = Field(None, max_length=200)
    contact_phone: str | None = Field(None, max_length=50)
    logo_path: str | None = Field(None, max_length=500)


class CompanyCreate(CompanyFields):
    name: str = Field(min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_required(v)


class CompanyUpdate(CompanyFields):
    name: str | None = Field(None, min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)


class CompanyResponse(CompanyFields):
    id: int
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}
