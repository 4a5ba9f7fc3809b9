# backend/tradelink/crud/farmers.py

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.crud.common import apply_updates, paginate
from tradelink.models.farmer import Farmer
from tradelink.models.user import User


async def create_farmer(db: AsyncSession, data: Dict[str, Any]) -> Farmer:
    farmer = Farmer(**data)
    db.add(farmer)
    await db.commit()
    return await get_farmer(db, farmer.id)


async def get_farmer(db: AsyncSession, farmer_id: str) -> Optional[Farmer]:
    return await db.scalar(
        select(Farmer)
        .where(Farmer.id == farmer_id)
        .execution_options(populate_existing=True)
    )


async def get_farmer_by_user(db: AsyncSession, user_id: str) -> Optional[Farmer]:
    return await db.scalar(select(Farmer).where(Farmer.user_id == user_id))


async def list_farmers(
    db: AsyncSession,
    region: Optional[str] = None,
    district: Optional[str] = None,
    verified: Optional[bool] = None,
    page: int = 1,
    limit: int = 20,
) -> Tuple[List[Farmer], int]:
    q = select(Farmer)
    if region:
        q = q.where(Farmer.region == region)
    if district:
        q = q.where(Farmer.district == district)
    if verified is not None:
        q = q.join(User, User.id == Farmer.user_id).where(User.verified == verified)
    q = q.order_by(Farmer.created_at.desc())
    return await paginate(db, q, page, limit)


async def update_farmer(db: AsyncSession, farmer: Farmer, updates: Dict[str, Any]) -> Farmer:
    apply_updates(farmer, updates)
    await db.commit()
    return await get_farmer(db, farmer.id)


async def delete_farmer(db: AsyncSession, farmer: Farmer) -> None:
    await db.delete(farmer)
    await db.commit()
