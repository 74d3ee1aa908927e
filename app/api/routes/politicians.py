"""Politician Routes — listing consumed by the internal admin page."""

from fastapi import APIRouter, Depends

from app.api.deps import get_services
from app.services.container import ServiceContainer

router = APIRouter(prefix="/v1", tags=["politicians"])


@router.get("/politicians")
async def list_politicians(services: ServiceContainer = Depends(get_services)):
    return {"politicians": await services.entities.list_politicians()}
