# backend/tradelink/schemas/listing.py

from typing import Optional, List
from datetime import datetime
from pydantic import Field

from tradelink.models.enums import QualityGrade, ListingStatus
from tradelink.schemas.base import CamelModel
from tradelink.schemas.farmer import Farmer


class ListingBase(CamelModel):
    crop_type: str
    crop_variety: Optional[str] = None
    quantity: float = Field(gt=0)
    unit: str = "tons"
    quality_grade: QualityGrade
    price_per_unit: float = Field(ge=0)
    harvest_date: Optional[datetime] = None
    available_from: datetime
    available_until: Optional[datetime] = None
    description: Optional[str] = None
    images: List[str] = []
    certifications: List[str] = []


class ListingCreate(ListingBase):
    status: Optional[ListingStatus] = None


class ListingUpdate(CamelModel):
    crop_type: Optional[str] = None
    crop_variety: Optional[str] = None
    quantity: Optional[float] = Field(default=None, gt=0)
    unit: Optional[str] = None
    quality_grade: Optional[QualityGrade] = None
    price_per_unit: Optional[float] = Field(default=None, ge=0)
    harvest_date: Optional[datetime] = None
    available_from: Optional[datetime] = None
    available_until: Optional[datetime] = None
    description: Optional[str] = None
    images: Optional[List[str]] = None
    certifications: Optional[List[str]] = None
    status: Optional[ListingStatus] = None


class Listing(ListingBase):
    id: str
    farmer_id: str
    status: ListingStatus
    farmer: Optional[Farmer] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
