# backend/tradelink/crud/negotiations.py

from typing import Any, Dict, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.crud.common import apply_updates
from tradelink.models.enums import NegotiationStatus
from tradelink.models.match import Match
from tradelink.models.negotiation import Negotiation, Offer


# ============================================================
# NEGOTIATIONS
# ============================================================

async def create_negotiation(db: AsyncSession, data: Dict[str, Any]) -> Negotiation:
    negotiation = Negotiation(**data)
    db.add(negotiation)
    await db.commit()
    return await get_negotiation(db, negotiation.id)


async def get_negotiation(db: AsyncSession, negotiation_id: str) -> Optional[Negotiation]:
    return await db.scalar(
        select(Negotiation)
        .where(Negotiation.id == negotiation_id)
        .execution_options(populate_existing=True)
    )


async def get_active_negotiation_for_match(db: AsyncSession, match_id: str) -> Optional[Negotiation]:
    return await db.scalar(
        select(Negotiation).where(
            Negotiation.match_id == match_id,
            Negotiation.status == NegotiationStatus.ACTIVE,
        )
    )


async def list_negotiations(
    db: AsyncSession,
    match_id: Optional[str] = None,
    farmer_id: Optional[str] = None,
    buyer_id: Optional[str] = None,
) -> List[Negotiation]:
    q = select(Negotiation)
    if match_id:
        q = q.where(Negotiation.match_id == match_id)
    elif farmer_id or buyer_id:
        access = []
        if farmer_id:
            access.append(Match.farmer_id == farmer_id)
        if buyer_id:
            access.append(Match.buyer_id == buyer_id)
        q = q.join(Match, Match.id == Negotiation.match_id).where(or_(*access))
    rows = await db.scalars(q.order_by(Negotiation.created_at.desc()))
    return rows.all()


async def update_negotiation(db: AsyncSession, negotiation: Negotiation, updates: Dict[str, Any]) -> Negotiation:
    apply_updates(negotiation, updates)
    await db.commit()
    return negotiation


# ============================================================
# OFFERS
# ============================================================

async def create_offer(db: AsyncSession, data: Dict[str, Any]) -> Offer:
    offer = Offer(**data)
    db.add(offer)
    await db.commit()
    await db.refresh(offer)
    return offer


async def get_offer(db: AsyncSession, offer_id: str) -> Optional[Offer]:
    return await db.get(Offer, offer_id)


async def update_offer(db: AsyncSession, offer: Offer, updates: Dict[str, Any]) -> Offer:
    apply_updates(offer, updates)
    await db.commit()
    await db.refresh(offer)
    return offer
