# backend/tradelink/schemas/export_company.py

from typing import Optional
from datetime import datetime

from tradelink.schemas.base import CamelModel
from tradelink.schemas.user import UserSummary


class ExportCompanyBase(CamelModel):
    company_name: str
    registration_no: str
    gepa_license: Optional[str] = None


class ExportCompanyCreate(ExportCompanyBase):
    user_id: str


class ExportCompanyUpdate(CamelModel):
    company_name: Optional[str] = None
    registration_no: Optional[str] = None
    gepa_license: Optional[str] = None


class ExportCompanySummary(CamelModel):
    id: str
    company_name: str
    registration_no: str


class ExportCompany(ExportCompanyBase):
    id: str
    user_id: str
    user: Optional[UserSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
