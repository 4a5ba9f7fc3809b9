# backend/tradelink/schemas/farmer.py

from typing import Optional, List
from datetime import datetime

from tradelink.schemas.base import CamelModel
from tradelink.schemas.user import UserSummary


class FarmerBase(CamelModel):
    business_name: Optional[str] = None
    location: str
    district: str
    region: str
    gps_address: Optional[str] = None
    farm_size: Optional[float] = None
    cooperative_id: Optional[str] = None
    certifications: List[str] = []
    bank_account: Optional[str] = None
    mobile_money_number: Optional[str] = None


class FarmerCreate(FarmerBase):
    user_id: str


class FarmerUpdate(CamelModel):
    business_name: Optional[str] = None
    location: Optional[str] = None
    district: Optional[str] = None
    region: Optional[str] = None
    gps_address: Optional[str] = None
    farm_size: Optional[float] = None
    cooperative_id: Optional[str] = None
    certifications: Optional[List[str]] = None
    bank_account: Optional[str] = None
    mobile_money_number: Optional[str] = None


class Farmer(FarmerBase):
    id: str
    user_id: str
    user: Optional[UserSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
