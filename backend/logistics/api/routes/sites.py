"""
Site occupancy routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from logistics.core.config import settings
from logistics.db.session import get_db
from logistics.models.user import User
from logistics.schemas.site import SiteResponse, POBUpdate
from logistics.services.site_service import list_sites, get_site, initialize_sites, set_pob
from logistics.api.dependencies import get_current_user, get_current_admin

router = APIRouter(prefix="/sites", tags=["sites"])


@router.get("", response_model=List[SiteResponse])
async def read_sites(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get all sites ordered by name."""
    return list_sites(db)


@router.post("/initialize", response_model=List[SiteResponse], status_code=status.HTTP_201_CREATED)
async def initialize(
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Create the configured sites that do not exist yet."""
    return initialize_sites(settings.SITE_NAMES, settings.DEFAULT_MAXIMUM_POB, db)


@router.get("/{site_name}", response_model=SiteResponse)
async def read_site(
    site_name: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a site by name."""
    return get_site(site_name, db)


@router.put("/{site_name}/pob", response_model=SiteResponse)
async def update_pob(
    site_name: str,
    body: POBUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Manually set a site's current POB. Creates the site if it is missing."""
    return set_pob(site_name, body.current_pob, db)
