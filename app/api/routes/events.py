"""Event Routes — recent event rows for an event page.

Invariants:
    - At most 10 rows, most recent first
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_services
from app.services.container import ServiceContainer

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/{event_iden}/contributions")
async def get_event_contributions(
    event_iden: str, services: ServiceContainer = Depends(get_services),
):
    return await services.entities.list_event_contributions(event_iden)
