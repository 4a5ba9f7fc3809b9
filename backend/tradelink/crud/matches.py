# backend/tradelink/crud/matches.py

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.crud.common import apply_updates, paginate
from tradelink.models.match import Match


async def create_match(db: AsyncSession, data: Dict[str, Any], commit: bool = True) -> Match:
    match = Match(**data)
    db.add(match)
    if commit:
        await db.commit()
    else:
        await db.flush()
    return match


async def get_match(db: AsyncSession, match_id: str) -> Optional[Match]:
    return await db.scalar(
        select(Match)
        .where(Match.id == match_id)
        .execution_options(populate_existing=True)
    )


async def get_matches_by_ids(db: AsyncSession, match_ids: List[str]) -> List[Match]:
    if not match_ids:
        return []
    rows = await db.scalars(
        select(Match)
        .where(Match.id.in_(match_ids))
        .execution_options(populate_existing=True)
    )
    by_id = {m.id: m for m in rows.all()}
    return [by_id[i] for i in match_ids if i in by_id]


async def list_matches(
    db: AsyncSession,
    farmer_id: Optional[str] = None,
    buyer_id: Optional[str] = None,
    listing_id: Optional[str] = None,
    status: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> Tuple[List[Match], int]:
    q = select(Match)
    if farmer_id:
        q = q.where(Match.farmer_id == farmer_id)
    if buyer_id:
        q = q.where(Match.buyer_id == buyer_id)
    if listing_id:
        q = q.where(Match.listing_id == listing_id)
    if status:
        q = q.where(Match.status == status)
    q = q.order_by(Match.compatibility_score.desc())
    return await paginate(db, q, page, limit)


async def update_match(db: AsyncSession, match: Match, updates: Dict[str, Any]) -> Match:
    apply_updates(match, updates)
    await db.commit()
    return await get_match(db, match.id)


async def delete_match(db: AsyncSession, match: Match) -> None:
    await db.delete(match)
    await db.commit()
