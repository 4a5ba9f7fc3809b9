# backend/tradelink/schemas/buyer.py

from typing import Optional, List
from datetime import datetime

from tradelink.schemas.base import CamelModel
from tradelink.schemas.user import UserSummary


class BuyerBase(CamelModel):
    company_name: str
    country: str
    country_name: Optional[str] = None
    industry: str
    website: Optional[str] = None
    company_size: Optional[str] = None
    seeking_crops: List[str] = []
    volume_required: Optional[str] = None
    quality_standards: List[str] = []
    preferred_currency: Optional[str] = "USD"


class BuyerCreate(BuyerBase):
    user_id: str


class BuyerUpdate(CamelModel):
    company_name: Optional[str] = None
    country: Optional[str] = None
    country_name: Optional[str] = None
    industry: Optional[str] = None
    website: Optional[str] = None
    company_size: Optional[str] = None
    seeking_crops: Optional[List[str]] = None
    volume_required: Optional[str] = None
    quality_standards: Optional[List[str]] = None
    preferred_currency: Optional[str] = None


class Buyer(BuyerBase):
    id: str
    user_id: str
    user: Optional[UserSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
