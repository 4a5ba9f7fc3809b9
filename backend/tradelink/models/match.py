# backend/tradelink/models/match.py

from sqlalchemy import Column, String, Float, DateTime, Text, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship

from tradelink.core.database import Base
from tradelink.models.base import gen_uuid, utcnow
from tradelink.models.enums import MatchStatus


class Match(Base):
    __tablename__ = "matches"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    listing_id = Column(String(36), ForeignKey("listings.id", ondelete="CASCADE"), nullable=False, index=True)
    farmer_id = Column(String(36), ForeignKey("farmers.id", ondelete="CASCADE"), nullable=False, index=True)
    buyer_id = Column(String(36), ForeignKey("buyers.id", ondelete="CASCADE"), nullable=False, index=True)

    compatibility_score = Column(Float, nullable=False)
    estimated_value = Column(Float, nullable=False)
    status = Column(
        SAEnum(MatchStatus, name="match_status", native_enum=False),
        nullable=False,
        default=MatchStatus.SUGGESTED,
    )
    ai_recommendation = Column(Text, nullable=True)   # JSON list of reasons

    # one stamp per pipeline stage
    contacted_at = Column(DateTime, nullable=True)
    negotiation_started_at = Column(DateTime, nullable=True)
    contract_signed_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    listing = relationship("Listing", lazy="selectin")
    farmer = relationship("Farmer", lazy="selectin")
    buyer = relationship("Buyer", lazy="selectin")
