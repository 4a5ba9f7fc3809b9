# backend/tradelink/models/farmer.py

from sqlalchemy import Column, String, Float, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from tradelink.core.database import Base
from tradelink.models.base import gen_uuid, utcnow


class Farmer(Base):
    __tablename__ = "farmers"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    business_name = Column(String, nullable=True)
    location = Column(String, nullable=False)
    district = Column(String, nullable=False)
    region = Column(String, nullable=False, index=True)
    gps_address = Column(String, nullable=True)
    farm_size = Column(Float, nullable=True)
    cooperative_id = Column(String, nullable=True)
    certifications = Column(JSON, nullable=False, default=list)
    bank_account = Column(String, nullable=True)
    mobile_money_number = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", lazy="selectin")
