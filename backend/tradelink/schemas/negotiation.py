# backend/tradelink/schemas/negotiation.py

from typing import Optional, List
from datetime import datetime
from pydantic import Field

from tradelink.models.enums import NegotiationStatus, OfferStatus, UserRole
from tradelink.schemas.base import CamelModel
from tradelink.schemas.match import Match
from tradelink.schemas.transaction import Transaction


# ============================================================
# OFFERS
# ============================================================

class OfferCreate(CamelModel):
    price: float = Field(gt=0)
    quantity: float = Field(gt=0)
    currency: Optional[str] = None
    message: Optional[str] = None
    terms: Optional[str] = None
    # defaults to the caller's token role
    offered_by_role: Optional[UserRole] = None


class OfferRespond(CamelModel):
    status: OfferStatus
    response_message: Optional[str] = None


class Offer(CamelModel):
    id: str
    negotiation_id: str
    offered_by: str
    offered_by_role: UserRole
    price: float
    quantity: float
    currency: str
    message: Optional[str] = None
    terms: Optional[str] = None
    status: OfferStatus
    responded_at: Optional[datetime] = None
    response_message: Optional[str] = None
    created_at: Optional[datetime] = None


# ============================================================
# NEGOTIATIONS
# ============================================================

class NegotiationCreate(CamelModel):
    match_id: str
    initial_price: float = Field(gt=0)
    current_price: float = Field(gt=0)
    quantity: float = Field(gt=0)
    currency: Optional[str] = None
    terms: Optional[str] = None
    delivery_terms: Optional[str] = None
    payment_terms: Optional[str] = None
    initiated_by: Optional[str] = None
    expires_at: Optional[datetime] = None


class Negotiation(CamelModel):
    id: str
    match_id: str
    status: NegotiationStatus
    initial_price: float
    current_price: float
    quantity: float
    currency: str
    terms: Optional[str] = None
    delivery_terms: Optional[str] = None
    payment_terms: Optional[str] = None
    initiated_by: str
    last_updated_by: str
    accepted_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class NegotiationDetail(Negotiation):
    match: Optional[Match] = None
    offers: List[Offer] = []
    transaction: Optional[Transaction] = None


class NegotiationAccepted(NegotiationDetail):
    transaction_id: str
