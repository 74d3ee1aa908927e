"""Route Dependencies — service access and bearer-token authentication.

Invariants:
    - Services come from app.state.services (built in the lifespan), never imported
    - get_current_user reads "Authorization: Bearer <token>"; a missing header or
      unknown token is a 401 raised as UnauthorizedError
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.records import UserProfile
from app.services.container import ServiceContainer

bearer_scheme = HTTPBearer(auto_error=False)


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    services: ServiceContainer = Depends(get_services),
) -> UserProfile:
    token = credentials.credentials if credentials else None
    return await services.identity.resolve_bearer_token(token)
