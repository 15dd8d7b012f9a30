"""
Admin-only endpoints: dashboard counts, venue/event management, dataset import.
The role check is attached to the router, so it covers every route here.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.api.deps import require_admin
from cultural_spa.core.config import get_settings
from cultural_spa.db.session import get_db
from cultural_spa.schemas.admin import DashboardResponse, ImportResponse
from cultural_spa.schemas.event import EventCreate, EventResponse, EventUpdate
from cultural_spa.schemas.venue import VenueCreate, VenueResponse, VenueUpdate
from cultural_spa.services import admin_service, event_service, venue_service

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(db: AsyncSession = Depends(get_db)):
    return await admin_service.get_dashboard(db)


@router.post("/venues", response_model=VenueResponse, status_code=status.HTTP_201_CREATED)
async def create_venue(data: VenueCreate, db: AsyncSession = Depends(get_db)):
    return await venue_service.create_venue(db, data)


@router.patch("/venues/{venue_id}", response_model=VenueResponse)
async def update_venue(venue_id: str, data: VenueUpdate, db: AsyncSession = Depends(get_db)):
    return await venue_service.update_venue(db, venue_id, data)


@router.delete("/venues/{venue_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_venue(venue_id: str, db: AsyncSession = Depends(get_db)):
    """Delete a venue. Its events, comments and favorites are left in place."""
    await venue_service.delete_venue(db, venue_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/events", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(data: EventCreate, db: AsyncSession = Depends(get_db)):
    return await event_service.create_event(db, data)


@router.patch("/events/{event_id}", response_model=EventResponse)
async def update_event(event_id: str, data: EventUpdate, db: AsyncSession = Depends(get_db)):
    return await event_service.update_event(db, event_id, data)


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: str, db: AsyncSession = Depends(get_db)):
    await event_service.delete_event(db, event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/import", response_model=ImportResponse)
async def import_dataset(db: AsyncSession = Depends(get_db)):
    """Reload venues and events from the dataset files. Needs ALLOW_IMPORT."""
    settings = get_settings()
    return await admin_service.import_dataset(db, settings.DATASET_DIR, allowed=settings.ALLOW_IMPORT)
