# backend/tradelink/crud/supplier_networks.py

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.crud.common import apply_updates, paginate
from tradelink.models.enums import ListingStatus, RelationshipStatus
from tradelink.models.listing import Listing
from tradelink.models.match import Match
from tradelink.models.supplier_network import SupplierNetwork
from tradelink.models.transaction import Transaction


async def create_supplier_network(db: AsyncSession, data: Dict[str, Any]) -> SupplierNetwork:
    network = SupplierNetwork(**data)
    db.add(network)
    await db.commit()
    return await get_supplier_network(db, network.id)


async def get_supplier_network(db: AsyncSession, network_id: str) -> Optional[SupplierNetwork]:
    return await db.scalar(
        select(SupplierNetwork)
        .where(SupplierNetwork.id == network_id)
        .execution_options(populate_existing=True)
    )


async def get_supplier_link(db: AsyncSession, export_company_id: str, farmer_id: str) -> Optional[SupplierNetwork]:
    return await db.scalar(
        select(SupplierNetwork).where(
            SupplierNetwork.export_company_id == export_company_id,
            SupplierNetwork.farmer_id == farmer_id,
        )
    )


async def list_supplier_networks(
    db: AsyncSession,
    export_company_id: str,
    status: Optional[str] = None,
    relationship_type: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> Tuple[List[SupplierNetwork], int]:
    q = select(SupplierNetwork).where(SupplierNetwork.export_company_id == export_company_id)
    if status:
        q = q.where(SupplierNetwork.status == status)
    if relationship_type:
        q = q.where(SupplierNetwork.relationship_type == relationship_type)
    q = q.order_by(SupplierNetwork.added_at.desc()).execution_options(populate_existing=True)
    return await paginate(db, q, page, limit)


async def update_supplier_network(db: AsyncSession, network: SupplierNetwork, updates: Dict[str, Any]) -> SupplierNetwork:
    apply_updates(network, updates)
    await db.commit()
    return await get_supplier_network(db, network.id)


async def delete_supplier_network(db: AsyncSession, network: SupplierNetwork) -> None:
    await db.delete(network)
    await db.commit()


async def supplier_transactions(
    db: AsyncSession,
    export_company_id: str,
    farmer_id: str,
    limit: Optional[int] = None,
) -> List[Transaction]:
    """Transactions the export company handled on this farmer's matches, newest first."""
    q = (
        select(Transaction)
        .join(Match, Match.id == Transaction.match_id)
        .where(Transaction.export_company_id == export_company_id, Match.farmer_id == farmer_id)
        .order_by(Transaction.created_at.desc())
    )
    if limit:
        q = q.limit(limit)
    rows = await db.scalars(q)
    return rows.all()


async def count_active_listings(db: AsyncSession, farmer_id: str) -> int:
    return await db.scalar(
        select(func.count())
        .select_from(Listing)
        .where(Listing.farmer_id == farmer_id, Listing.status == ListingStatus.ACTIVE.value)
    ) or 0


async def supplier_network_stats(db: AsyncSession, export_company_id: str) -> Dict[str, Any]:
    scoped = SupplierNetwork.export_company_id == export_company_id
    total = await db.scalar(select(func.count()).select_from(SupplierNetwork).where(scoped))
    active = await db.scalar(
        select(func.count())
        .select_from(SupplierNetwork)
        .where(scoped, SupplierNetwork.status == RelationshipStatus.ACTIVE)
    )
    deals, value = (
        await db.execute(select(func.sum(SupplierNetwork.total_deals), func.sum(SupplierNetwork.total_value)).where(scoped))
    ).one()

    return {
        "total_suppliers": total or 0,
        "active_suppliers": active or 0,
        "total_deals": int(deals or 0),
        "total_value": float(value or 0),
    }
