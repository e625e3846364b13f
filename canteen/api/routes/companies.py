"""Company Routes — employer master data."""

from fastapi import APIRouter, Depends, status

from canteen.api.dependencies import get_company_admin, require_admin
from canteen.schemas.directory import CompanyCreate, CompanyResponse, CompanyUpdate
from canteen.services.directory_admin import CompanyAdmin

router = APIRouter(prefix="/api/v1/companies", tags=["companies"])


@router.get("", response_model=list[CompanyResponse])
async def list_companies(admin: CompanyAdmin = Depends(get_company_admin)):
    return await admin.list_companies()


@router.post(
    "", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_company(
    body: CompanyCreate, admin: CompanyAdmin = Depends(get_company_admin),
):
    return await admin.create_company(**body.model_dump())


@router.put(
    "/{company_id}", response_model=CompanyResponse,
    dependencies=[Depends(require_admin)],
)
async def update_company(
    company_id: int, body: CompanyUpdate,
    admin: CompanyAdmin = Depends(get_company_admin),
):
    return await admin.update_company(company_id, **body.model_dump(exclude_unset=True))


@router.delete("/{company_id}", dependencies=[Depends(require_admin)])
async def delete_company(
    company_id: int, admin: CompanyAdmin = Depends(get_company_admin),
):
    """Deletes the employer and every worker registered under it."""
    removed = await admin.delete_company(company_id)
    return {"deleted": True, "workers_deleted": removed}
