"""Display Settings Routes — restaurant name and logo for kiosk and tickets."""

from fastapi import APIRouter, Depends

from canteen.api.dependencies import get_display_settings, require_admin
from canteen.schemas.settings import DisplaySettingsResponse, DisplaySettingsUpdate
from canteen.services.directory_admin import DisplaySettings

router = APIRouter(prefix="/api/v1/settings", tags=["settings"])


@router.get("", response_model=DisplaySettingsResponse)
async def get_display_settings_view(
    settings: DisplaySettings = Depends(get_display_settings),
):
    return await settings.get_all()


@router.put(
    "", response_model=DisplaySettingsResponse,
    dependencies=[Depends(require_admin)],
)
async def update_display_settings(
    body: DisplaySettingsUpdate,
    settings: DisplaySettings = Depends(get_display_settings),
):
    return await settings.update(body.model_dump(exclude_none=True))
