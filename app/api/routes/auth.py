"""Authentication Route — exchange a Facebook login token for a bearer token.

Invariants:
    - Unauthenticated: this is how clients obtain a bearer token
    - Invalid or missing Facebook token -> 400; storage failure -> 500
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_services
from app.schemas.auth import AuthenticateRequest, AuthenticateResponse
from app.services.container import ServiceContainer

router = APIRouter(prefix="/v1", tags=["auth"])


@router.post("/authenticate", response_model=AuthenticateResponse, response_model_by_alias=True)
async def authenticate(
    body: AuthenticateRequest,
    services: ServiceContainer = Depends(get_services),
):
    access_token = await services.identity.authenticate(body.facebook_token)
    return AuthenticateResponse(access_token=access_token)
