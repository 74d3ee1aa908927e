"""Contribution Route — charge the user's card and record a contribution.

Invariants:
    - 200 once the charge succeeded, whatever happened to the bookkeeping writes
    - Bad input, unknown entities, no card, or a declined charge -> 400
    - Lookup failures -> 500
"""

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_current_user, get_services
from app.core.records import UserProfile
from app.schemas.contribution import CreateContributionRequest
from app.services.container import ServiceContainer

router = APIRouter(prefix="/v1", tags=["contributions"])


@router.post("/create-contribution")
async def create_contribution(
    body: CreateContributionRequest,
    user: UserProfile = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
):
    await services.contributions.create_contribution(
        user, body.event_iden, body.pac_iden, body.amount,
    )
    return Response(status_code=status.HTTP_200_OK)
