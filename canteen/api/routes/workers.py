"""Worker Routes — directory listing and admin maintenance.

Invariants:
    - Listing is public (kiosk lookups); every mutation requires an admin session
    - DELETE takes a comma-separated id list; non-numeric entries are ignored
"""

from fastapi import APIRouter, Depends, Query, status

from canteen.api.dependencies import get_worker_admin, require_admin
from canteen.schemas.directory import WorkerCreate, WorkerResponse, WorkerUpdate
from canteen.services.directory_admin import WorkerAdmin

router = APIRouter(prefix="/api/v1/workers", tags=["workers"])


@router.get("", response_model=list[WorkerResponse])
async def list_workers(admin: WorkerAdmin = Depends(get_worker_admin)):
    return await admin.list_workers()


@router.post(
    "", response_model=WorkerResponse, status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_worker(
    body: WorkerCreate, admin: WorkerAdmin = Depends(get_worker_admin),
):
    return await admin.create_worker(
        identity=body.identity, name=body.name, company=body.company,
        cost_center=body.cost_center, tier=body.tier,
    )


@router.put(
    "/{worker_id}", response_model=WorkerResponse,
    dependencies=[Depends(require_admin)],
)
async def update_worker(
    worker_id: int, body: WorkerUpdate,
    admin: WorkerAdmin = Depends(get_worker_admin),
):
    return await admin.update_worker(worker_id, body.model_dump(exclude_unset=True))


@router.delete("", dependencies=[Depends(require_admin)])
async def delete_workers(
    ids: str = Query(""), admin: WorkerAdmin = Depends(get_worker_admin),
):
    worker_ids = [int(part) for part in ids.split(",") if part.strip().isdigit()]
    deleted = await admin.delete_workers(worker_ids)
    return {"deleted": deleted}
