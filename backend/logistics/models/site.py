"""
Site model for people-on-board (POB) tracking.
"""
from sqlalchemy import Column, String, Integer, DateTime, CheckConstraint
from logistics.db.base import BaseModel
from logistics.core.utils import utcnow


class Site(BaseModel):
    """Site with its current occupancy."""
    __tablename__ = "sites"

    site_name = Column(String(100), unique=True, nullable=False, index=True)
    current_pob = Column(Integer, default=0, nullable=False)
    maximum_pob = Column(Integer, nullable=False)
    pob_updated_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("current_pob >= 0", name="ck_site_current_pob_non_negative"),
        CheckConstraint("maximum_pob > 0", name="ck_site_maximum_pob_positive"),
    )
