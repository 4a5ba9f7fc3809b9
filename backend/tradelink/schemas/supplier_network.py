# backend/tradelink/schemas/supplier_network.py

from typing import Optional, List
from datetime import datetime

from tradelink.models.enums import RelationshipStatus, RelationshipType
from tradelink.schemas.base import CamelModel
from tradelink.schemas.export_company import ExportCompanySummary
from tradelink.schemas.farmer import Farmer
from tradelink.schemas.transaction import Transaction


class SupplierNetworkCreate(CamelModel):
    farmer_id: str
    relationship_type: Optional[RelationshipType] = None
    contract_start_date: Optional[datetime] = None
    contract_end_date: Optional[datetime] = None
    notes: Optional[str] = None


class SupplierNetworkUpdate(CamelModel):
    status: Optional[RelationshipStatus] = None
    relationship_type: Optional[RelationshipType] = None
    contract_start_date: Optional[datetime] = None
    contract_end_date: Optional[datetime] = None
    notes: Optional[str] = None


class SupplierMetrics(CamelModel):
    total_deals: int
    total_value: float
    quality_score: Optional[float] = None
    reliability_score: Optional[float] = None
    last_deal_date: Optional[datetime] = None
    active_listings: int


class SupplierNetwork(CamelModel):
    id: str
    export_company_id: str
    farmer_id: str
    status: RelationshipStatus
    relationship_type: Optional[RelationshipType] = None
    contract_start_date: Optional[datetime] = None
    contract_end_date: Optional[datetime] = None
    notes: Optional[str] = None
    total_deals: int
    total_value: float
    quality_score: Optional[float] = None
    reliability_score: Optional[float] = None
    last_deal_date: Optional[datetime] = None
    added_by: str
    added_at: Optional[datetime] = None
    farmer: Optional[Farmer] = None
    export_company: Optional[ExportCompanySummary] = None


class SupplierNetworkWithMetrics(SupplierNetwork):
    metrics: SupplierMetrics


class SupplierNetworkDetail(SupplierNetwork):
    transaction_history: List[Transaction] = []


class SupplierNetworkStats(CamelModel):
    total_suppliers: int
    active_suppliers: int
    total_deals: int
    total_value: float
