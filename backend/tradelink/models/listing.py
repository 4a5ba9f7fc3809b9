# backend/tradelink/models/listing.py

from sqlalchemy import Column, String, Float, DateTime, Text, ForeignKey, JSON, Enum as SAEnum
from sqlalchemy.orm import relationship

from tradelink.core.database import Base
from tradelink.models.base import gen_uuid, utcnow
from tradelink.models.enums import QualityGrade, ListingStatus


class Listing(Base):
    __tablename__ = "listings"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    farmer_id = Column(String(36), ForeignKey("farmers.id", ondelete="CASCADE"), nullable=False, index=True)
    crop_type = Column(String, nullable=False, index=True)
    crop_variety = Column(String, nullable=True)
    quantity = Column(Float, nullable=False)
    unit = Column(String, nullable=False, default="tons")
    quality_grade = Column(SAEnum(QualityGrade, name="quality_grade", native_enum=False), nullable=False)
    price_per_unit = Column(Float, nullable=False)
    harvest_date = Column(DateTime, nullable=True)
    available_from = Column(DateTime, nullable=False)
    available_until = Column(DateTime, nullable=True)
    description = Column(Text, nullable=True)
    images = Column(JSON, nullable=False, default=list)
    certifications = Column(JSON, nullable=False, default=list)
    status = Column(
        SAEnum(ListingStatus, name="listing_status", native_enum=False),
        nullable=False,
        default=ListingStatus.ACTIVE,
        index=True,
    )

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    farmer = relationship("Farmer", lazy="selectin")
