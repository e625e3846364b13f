"""Auth Schemas — admin login and session status."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    pin: str = Field(min_length=1, max_length=200)


class LoginResponse(BaseModel):
    token: str
    expires_in: int


class SessionStatus(BaseModel):
    authenticated: bool
