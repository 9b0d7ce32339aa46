"""
Site occupancy (POB) tracking.
"""
import logging
from typing import Any, Iterable, List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from logistics.core.config import settings
from logistics.core.exceptions import InvalidInputError, NotFoundError
from logistics.core.utils import is_strict_int, utcnow
from logistics.db.operations import insert_if_absent, store_operation, upsert
from logistics.models.site import Site

logger = logging.getLogger(__name__)


def _new_site_row(site_name: str, current_pob: int, maximum_pob: int) -> dict:
    now = utcnow()
    return {
        "site_name": site_name,
        "current_pob": current_pob,
        "maximum_pob": maximum_pob,
        "pob_updated_date": now,
        "created_at": now,
        "updated_at": now,
    }


def _check_maximum(maximum_pob: Any) -> None:
    if not is_strict_int(maximum_pob) or maximum_pob < 1:
        raise InvalidInputError("maximum_pob must be a positive integer")


@store_operation
def list_sites(db: Session) -> List[Site]:
    """All sites ordered by name."""
    return db.execute(
        select(Site).order_by(Site.site_name.asc()).execution_options(populate_existing=True)
    ).scalars().all()


@store_operation
def get_site(site_name: str, db: Session) -> Site:
    site = db.execute(
        select(Site).where(Site.site_name == site_name).execution_options(populate_existing=True)
    ).scalar_one_or_none()
    if site is None:
        raise NotFoundError(f"Site '{site_name}' not found")
    return site


@store_operation
def initialize_sites(site_names: Iterable[str], default_max: int, db: Session) -> List[Site]:
    """
    Create each named site that does not exist yet with POB 0.

    Existing sites keep every field as it is, so calling this again with
    the same names changes nothing. Returns all sites ordered by name.
    """
    _check_maximum(default_max)
    names = list(dict.fromkeys(site_names))
    if any(not isinstance(name, str) or not name.strip() for name in names):
        raise InvalidInputError("Site names must be non-empty strings")

    rows = [_new_site_row(name, 0, default_max) for name in names]
    inserted = insert_if_absent(db, Site.__table__, rows, key="site_name")
    db.commit()
    logger.info(f"Initialized sites: {inserted} created, {len(names) - inserted} already present")
    return list_sites(db)


@store_operation
def set_pob(site_name: str, value: Any, db: Session, *, default_max: Optional[int] = None) -> Site:
    """
    Set the current POB of a site, creating the site if it is missing.

    The value is not compared with the site's maximum_pob; a manual update
    may exceed it.
    """
    if not is_strict_int(value) or value < 0:
        raise InvalidInputError("current_pob must be a non-negative integer")
    if default_max is None:
        default_max = settings.DEFAULT_MAXIMUM_POB
    _check_maximum(default_max)

    upsert(
        db,
        Site.__table__,
        _new_site_row(site_name, value, default_max),
        key="site_name",
        update_fields=("current_pob", "pob_updated_date", "updated_at"),
    )
    db.commit()
    logger.info(f"Site {site_name} POB set to {value}")
    return get_site(site_name, db)
