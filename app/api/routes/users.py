"""User Routes — dashboard data, profile edits and card registration.

Invariants:
    - Every route requires a bearer token (get_current_user)
    - Routes never contain business logic; they translate bodies and delegate
    - Success is a bare 200; failures map through the global error handlers
"""

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_current_user, get_services
from app.core.records import UserProfile
from app.schemas.profile import ProfileUpdate, SetCardRequest
from app.services.container import ServiceContainer

router = APIRouter(prefix="/v1", tags=["users"])


@router.post("/get-user-data")
async def get_user_data(
    user: UserProfile = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
):
    """Profile, whether a card is on file, and contributions newest-first."""
    return await services.profiles.get_profile(user)


@router.post("/update-profile")
async def update_profile(
    body: ProfileUpdate,
    user: UserProfile = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
):
    await services.profiles.update_profile(user, body.to_patch())
    return Response(status_code=status.HTTP_200_OK)


@router.post("/set-card")
async def set_card(
    body: SetCardRequest,
    user: UserProfile = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
):
    await services.payment_methods.set_card(user, body.card_token)
    return Response(status_code=status.HTTP_200_OK)
