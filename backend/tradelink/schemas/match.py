# backend/tradelink/schemas/match.py

from typing import Optional
from datetime import datetime

from tradelink.models.enums import MatchStatus
from tradelink.schemas.base import CamelModel
from tradelink.schemas.buyer import Buyer
from tradelink.schemas.listing import Listing


class MatchCreate(CamelModel):
    listing_id: str
    farmer_id: Optional[str] = None
    buyer_id: Optional[str] = None
    compatibility_score: Optional[float] = None
    estimated_value: Optional[float] = None
    ai_recommendation: Optional[str] = None
    status: Optional[MatchStatus] = None


class MatchStatusUpdate(CamelModel):
    status: MatchStatus


class Match(CamelModel):
    id: str
    listing_id: str
    farmer_id: str
    buyer_id: str
    compatibility_score: float
    estimated_value: float
    status: MatchStatus
    ai_recommendation: Optional[str] = None
    contacted_at: Optional[datetime] = None
    negotiation_started_at: Optional[datetime] = None
    contract_signed_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    listing: Optional[Listing] = None
    buyer: Optional[Buyer] = None
