"""Auth Schemas — Facebook token exchange."""

from app.schemas._base import CamelModel


class AuthenticateRequest(CamelModel):
    facebook_token: str | None = None


class AuthenticateResponse(CamelModel):
    access_token: str
