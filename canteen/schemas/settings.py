"""Display Settings Schemas — only the known keys are accepted."""

from pydantic import BaseModel, ConfigDict, Field


class DisplaySettingsUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    restaurant_name: str | None = Field(None, max_length=200)
    restaurant_logo: str | None = Field(None, max_length=500)


class DisplaySettingsResponse(BaseModel):
    restaurant_name: str | None = None
    restaurant_logo: str | None = None
