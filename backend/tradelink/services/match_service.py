# backend/tradelink/services/match_service.py

"""
Match pipeline: suggestion, manual creation and status tracking.

SUGGESTED -> CONTACTED -> NEGOTIATING -> CONTRACT_SIGNED -> COMPLETED
(CANCELLED at any point). Status updates are not guarded; each stage only
stamps its timestamp the first time it is reached.
"""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.exceptions import NotFoundError
from tradelink.core.logger import get_logger
from tradelink.crud import matches as match_crud
from tradelink.crud.audit_log import create_audit_log
from tradelink.crud.buyers import get_buyer
from tradelink.crud.common import page_meta
from tradelink.crud.listings import get_listing, list_listings_for_matching
from tradelink.models.enums import MatchStatus
from tradelink.models.match import Match
from tradelink.services import matching_service
from tradelink.services.ai_client import AiClient
from tradelink.services.profile_service import ensure_buyer_profile

logger = get_logger(__name__)

DEFAULT_MANUAL_SCORE = 85

STATUS_TIMESTAMPS = {
    MatchStatus.CONTACTED: "contacted_at",
    MatchStatus.NEGOTIATING: "negotiation_started_at",
    MatchStatus.CONTRACT_SIGNED: "contract_signed_at",
    MatchStatus.COMPLETED: "completed_at",
}


async def suggest_matches(
    db: AsyncSession,
    buyer_id: str,
    limit: int = 10,
    ai_client: Optional[AiClient] = None,
) -> List[Match]:
    buyer = await get_buyer(db, buyer_id)
    if not buyer:
        raise NotFoundError("Buyer not found")

    international = matching_service.is_international(buyer)
    listings = await list_listings_for_matching(db, verified_only=international)

    results = await matching_service.find_matches(buyer, listings, limit=limit, ai_client=ai_client)

    ids = []
    for result in results:
        match = await match_crud.create_match(db, {
            "listing_id": result.listing_id,
            "farmer_id": result.farmer_id,
            "buyer_id": buyer.id,
            "compatibility_score": result.score,
            "estimated_value": result.estimated_value,
            "status": MatchStatus.SUGGESTED,
            "ai_recommendation": json.dumps(result.reasons),
        }, commit=False)
        ids.append(match.id)
    await db.commit()

    logger.info(
        f"Suggested {len(ids)} matches from {len(listings)} listings",
        extra={"entity_id": buyer.id},
    )
    return await match_crud.get_matches_by_ids(db, ids)


async def list_matches(
    db: AsyncSession,
    farmer_id: Optional[str] = None,
    buyer_id: Optional[str] = None,
    listing_id: Optional[str] = None,
    status: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> Dict[str, Any]:
    rows, total = await match_crud.list_matches(
        db,
        farmer_id=farmer_id,
        buyer_id=buyer_id,
        listing_id=listing_id,
        status=status,
        page=page,
        limit=limit,
    )
    return {"data": rows, "meta": page_meta(total, page, limit)}


async def get_match(db: AsyncSession, match_id: str) -> Match:
    match = await match_crud.get_match(db, match_id)
    if not match:
        raise NotFoundError("Match not found")
    return match


async def create_match(db: AsyncSession, data: Dict[str, Any], user_id: str) -> Match:
    """Manual match from a listing; the buyer defaults to the caller's profile."""
    buyer_id = data.get("buyer_id")
    if not buyer_id:
        buyer_id = (await ensure_buyer_profile(db, user_id)).id

    listing = await get_listing(db, data["listing_id"])
    if not listing:
        raise NotFoundError("Listing not found")

    status = data.get("status") or MatchStatus.CONTACTED
    score = data.get("compatibility_score")
    estimated_value = data.get("estimated_value")

    match = await match_crud.create_match(db, {
        "listing_id": listing.id,
        "farmer_id": data.get("farmer_id") or listing.farmer_id,
        "buyer_id": buyer_id,
        "compatibility_score": DEFAULT_MANUAL_SCORE if score is None else score,
        "estimated_value": listing.price_per_unit * listing.quantity if estimated_value is None else estimated_value,
        "ai_recommendation": data.get("ai_recommendation"),
        "status": status,
        "contacted_at": datetime.utcnow() if status == MatchStatus.CONTACTED else None,
    })

    await create_audit_log(db, user_id, "match", match.id, "create", f"listing={listing.id}")
    return await get_match(db, match.id)


async def update_match_status(db: AsyncSession, match_id: str, status: MatchStatus, user_id: Optional[str] = None) -> Match:
    match = await get_match(db, match_id)
    previous = match.status

    updates: Dict[str, Any] = {"status": status}
    stamp = STATUS_TIMESTAMPS.get(status)
    if stamp and getattr(match, stamp) is None:
        updates[stamp] = datetime.utcnow()

    match = await match_crud.update_match(db, match, updates)
    await create_audit_log(db, user_id, "match", match.id, "status", f"{previous.value} -> {status.value}")
    return match


async def delete_match(db: AsyncSession, match_id: str) -> None:
    match = await get_match(db, match_id)
    await match_crud.delete_match(db, match)
    logger.info(f"Match deleted: {match_id}", extra={"entity_id": match_id})
