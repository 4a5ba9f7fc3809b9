# backend/tradelink/crud/buyers.py

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.crud.common import apply_updates, paginate
from tradelink.models.buyer import Buyer


async def create_buyer(db: AsyncSession, data: Dict[str, Any]) -> Buyer:
    buyer = Buyer(**data)
    db.add(buyer)
    await db.commit()
    return await get_buyer(db, buyer.id)


async def get_buyer(db: AsyncSession, buyer_id: str) -> Optional[Buyer]:
    return await db.scalar(
        select(Buyer)
        .where(Buyer.id == buyer_id)
        .execution_options(populate_existing=True)
    )


async def get_buyer_by_user(db: AsyncSession, user_id: str) -> Optional[Buyer]:
    return await db.scalar(select(Buyer).where(Buyer.user_id == user_id))


async def list_buyers(
    db: AsyncSession,
    country: Optional[str] = None,
    industry: Optional[str] = None,
    seeking_crops: Optional[List[str]] = None,
    page: int = 1,
    limit: int = 20,
) -> Tuple[List[Buyer], int]:
    q = select(Buyer)
    if country:
        q = q.where(Buyer.country == country)
    if industry:
        q = q.where(Buyer.industry == industry)
    q = q.order_by(Buyer.created_at.desc())

    if not seeking_crops:
        return await paginate(db, q, page, limit)

    # seeking_crops is a JSON list; overlap is checked in Python so the
    # filter behaves the same on sqlite and postgres
    wanted = {c.lower() for c in seeking_crops}
    rows = (await db.scalars(q)).all()
    hits = [b for b in rows if wanted & {c.lower() for c in (b.seeking_crops or [])}]
    page = max(page or 1, 1)
    limit = max(limit or 20, 1)
    start = (page - 1) * limit
    return hits[start:start + limit], len(hits)


async def update_buyer(db: AsyncSession, buyer: Buyer, updates: Dict[str, Any]) -> Buyer:
    apply_updates(buyer, updates)
    await db.commit()
    return await get_buyer(db, buyer.id)


async def delete_buyer(db: AsyncSession, buyer: Buyer) -> None:
    await db.delete(buyer)
    await db.commit()
