# backend/tradelink/services/supplier_network_service.py

"""
Export company supplier networks: the farmers a company sources from.

Each link carries deal metrics (count, value, last deal) derived from the
transactions the company handled on that farmer's matches. They are
recomputed and stored whenever the network is listed.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.exceptions import ForbiddenError, InvalidStateError, NotFoundError
from tradelink.core.logger import get_logger
from tradelink.crud import supplier_networks as network_crud
from tradelink.crud.common import page_meta
from tradelink.crud.export_companies import get_export_company_by_user
from tradelink.crud.farmers import get_farmer
from tradelink.crud.users import get_user
from tradelink.models.enums import RelationshipType, UserRole
from tradelink.models.supplier_network import SupplierNetwork
from tradelink.models.transaction import Transaction
from tradelink.services.profile_service import get_export_company_for_user

logger = get_logger(__name__)

HISTORY_LIMIT = 10
EMPTY_STATS = {"total_suppliers": 0, "active_suppliers": 0, "total_deals": 0, "total_value": 0.0}


def deal_metrics(transactions: List[Transaction]) -> Dict[str, Any]:
    return {
        "total_deals": len(transactions),
        "total_value": float(sum(t.total_value or 0 for t in transactions)),
        "last_deal_date": max((t.created_at for t in transactions if t.created_at), default=None),
    }


async def add_supplier(db: AsyncSession, data: Dict[str, Any], user_id: str) -> SupplierNetwork:
    company = await get_export_company_for_user(db, user_id)

    farmer = await get_farmer(db, data["farmer_id"])
    if not farmer:
        raise NotFoundError("Farmer not found")

    if await network_crud.get_supplier_link(db, company.id, farmer.id):
        raise InvalidStateError("This farmer is already in your supplier network")

    network = await network_crud.create_supplier_network(db, {
        **data,
        "export_company_id": company.id,
        "relationship_type": data.get("relationship_type") or RelationshipType.DIRECT,
        "added_by": user_id,
    })
    logger.info(
        f"Supplier network created: {network.id} for export company {company.id}",
        extra={"user_id": user_id, "entity_id": network.id},
    )
    return network


async def list_suppliers(
    db: AsyncSession,
    user_id: str,
    status: Optional[str] = None,
    relationship_type: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> Dict[str, Any]:
    """{"data": [(network, metrics)], "meta": ...}; empty for users without an export company."""
    company = await get_export_company_by_user(db, user_id)
    if not company:
        return {"data": [], "meta": page_meta(0, page, limit)}

    networks, total = await network_crud.list_supplier_networks(
        db, company.id, status=status, relationship_type=relationship_type, page=page, limit=limit
    )

    data = []
    for network in networks:
        transactions = await network_crud.supplier_transactions(db, company.id, network.farmer_id)
        metrics = deal_metrics(transactions)
        network = await network_crud.update_supplier_network(db, network, metrics)
        metrics.update(
            quality_score=network.quality_score,
            reliability_score=network.reliability_score,
            active_listings=await network_crud.count_active_listings(db, network.farmer_id),
        )
        data.append((network, metrics))

    return {"data": data, "meta": page_meta(total, page, limit)}


async def get_supplier(db: AsyncSession, network_id: str) -> Tuple[SupplierNetwork, List[Transaction]]:
    network = await network_crud.get_supplier_network(db, network_id)
    if not network:
        raise NotFoundError("Supplier network relationship not found")
    history = await network_crud.supplier_transactions(
        db, network.export_company_id, network.farmer_id, limit=HISTORY_LIMIT
    )
    return network, history


async def _owned_network(db: AsyncSession, network_id: str, user_id: str) -> SupplierNetwork:
    network, _ = await get_supplier(db, network_id)
    company = await get_export_company_by_user(db, user_id)
    if company and company.id == network.export_company_id:
        return network
    user = await get_user(db, user_id)
    if not user or user.role != UserRole.ADMIN:
        raise ForbiddenError("You can only manage your own supplier network")
    return network


async def update_supplier(db: AsyncSession, network_id: str, updates: Dict[str, Any], user_id: str) -> SupplierNetwork:
    network = await _owned_network(db, network_id, user_id)
    return await network_crud.update_supplier_network(db, network, updates)


async def remove_supplier(db: AsyncSession, network_id: str, user_id: str) -> None:
    network = await _owned_network(db, network_id, user_id)
    await network_crud.delete_supplier_network(db, network)
    logger.info(f"Supplier removed from network: {network_id}", extra={"user_id": user_id, "entity_id": network_id})


async def supplier_stats(db: AsyncSession, user_id: str) -> Dict[str, Any]:
    company = await get_export_company_by_user(db, user_id)
    if not company:
        return dict(EMPTY_STATS)
    return await network_crud.supplier_network_stats(db, company.id)
