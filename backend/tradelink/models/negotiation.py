# backend/tradelink/models/negotiation.py

from sqlalchemy import Column, String, Float, DateTime, Text, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship

from tradelink.core.database import Base
from tradelink.models.base import gen_uuid, utcnow
from tradelink.models.enums import NegotiationStatus, OfferStatus, UserRole


# ============================================================
# NEGOTIATION
# at most one ACTIVE row per match; checked in the service, not here
# ============================================================
class Negotiation(Base):
    __tablename__ = "negotiations"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    match_id = Column(String(36), ForeignKey("matches.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(
        SAEnum(NegotiationStatus, name="negotiation_status", native_enum=False),
        nullable=False,
        default=NegotiationStatus.ACTIVE,
        index=True,
    )

    initial_price = Column(Float, nullable=False)
    current_price = Column(Float, nullable=False)
    quantity = Column(Float, nullable=False)
    currency = Column(String, nullable=False, default="USD")
    terms = Column(Text, nullable=True)
    delivery_terms = Column(Text, nullable=True)
    payment_terms = Column(Text, nullable=True)

    initiated_by = Column(String, nullable=False)
    last_updated_by = Column(String, nullable=False)

    accepted_at = Column(DateTime, nullable=True)
    rejected_at = Column(DateTime, nullable=True)
    expires_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    match = relationship("Match", lazy="selectin")
    offers = relationship(
        "Offer",
        order_by="desc(Offer.created_at)",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    transaction = relationship("Transaction", uselist=False, viewonly=True, lazy="selectin")


# ============================================================
# OFFER
# ============================================================
class Offer(Base):
    __tablename__ = "offers"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    negotiation_id = Column(String(36), ForeignKey("negotiations.id", ondelete="CASCADE"), nullable=False, index=True)
    offered_by = Column(String, nullable=False)
    offered_by_role = Column(SAEnum(UserRole, name="user_role", native_enum=False), nullable=False)
    price = Column(Float, nullable=False)
    quantity = Column(Float, nullable=False)
    currency = Column(String, nullable=False, default="USD")
    message = Column(Text, nullable=True)
    terms = Column(Text, nullable=True)
    status = Column(
        SAEnum(OfferStatus, name="offer_status", native_enum=False),
        nullable=False,
        default=OfferStatus.PENDING,
    )
    responded_at = Column(DateTime, nullable=True)
    response_message = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
