"""
Applications API - CRUD, filters and stats (stats cached per user)
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hiretrack.app.core.config import settings
from hiretrack.app.core.dependencies import get_current_user, get_db
from hiretrack.app.core.exceptions import InvalidInput, NotFound
from hiretrack.app.models.user import User
from hiretrack.app.schemas.application import (
    ApplicationCreate,
    ApplicationOut,
    ApplicationStats,
    ApplicationUpdate,
    application_to_out,
)
from hiretrack.app.services.application_service import ApplicationService, stats_cache_key
from hiretrack.app.utils import cache

router = APIRouter(prefix="/applications", tags=["applications"])


@router.post("", response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
async def create_application(
    payload: ApplicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        application = ApplicationService.create(db, current_user.id, payload)
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    await cache.delete(stats_cache_key(current_user.id))
    return application_to_out(application)


@router.get("", response_model=list[ApplicationOut])
def list_applications(
    status: str | None = None,
    company: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List applications, newest first. Filter by exact status or company substring."""
    apps = ApplicationService.list_for_user(db, current_user.id, status=status, company=company)
    return [application_to_out(a) for a in apps]


@router.get("/stats", response_model=ApplicationStats)
async def get_application_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Totals by status plus response/interview rates. Cached per user (ttl from config)."""
    key = stats_cache_key(current_user.id)
    cached = await cache.get(key)
    if cached is not None:
        return cached
    result = ApplicationService.stats(db, current_user.id)
    await cache.set(key, result, ttl=settings.application_stats_cache_ttl)
    return result


@router.get("/{application_id}", response_model=ApplicationOut)
def get_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        application = ApplicationService.get(db, application_id, current_user.id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return application_to_out(application, include_reminders=True)


@router.patch("/{application_id}", response_model=ApplicationOut)
async def update_application(
    application_id: int,
    payload: ApplicationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        application = ApplicationService.update(db, application_id, current_user.id, payload)
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    await cache.delete(stats_cache_key(current_user.id))
    return application_to_out(application, include_reminders=True)


@router.delete("/{application_id}")
async def delete_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        ApplicationService.delete(db, application_id, current_user.id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    await cache.delete(stats_cache_key(current_user.id))
    return {"deleted": application_id}
