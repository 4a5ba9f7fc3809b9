# backend/tradelink/models/buyer.py

from sqlalchemy import Column, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from tradelink.core.database import Base
from tradelink.models.base import gen_uuid, utcnow


class Buyer(Base):
    __tablename__ = "buyers"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    company_name = Column(String, nullable=False)
    country = Column(String, nullable=False)          # ISO code, e.g. "GH"
    country_name = Column(String, nullable=True)
    industry = Column(String, nullable=False)
    website = Column(String, nullable=True)
    company_size = Column(String, nullable=True)

    seeking_crops = Column(JSON, nullable=False, default=list)
    volume_required = Column(String, nullable=True)   # free text, e.g. "10 tons/month"
    quality_standards = Column(JSON, nullable=False, default=list)
    preferred_currency = Column(String, nullable=True, default="USD")

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", lazy="selectin")
