# backend/tradelink/services/negotiation_service.py

"""
Negotiation / offer state machine.

Negotiation: ACTIVE -> ACCEPTED | REJECTED | EXPIRED | CANCELLED
Offer:       PENDING -> ACCEPTED | REJECTED | COUNTERED | EXPIRED

 - one ACTIVE negotiation per match
 - a new offer overwrites the negotiation's current price / quantity
 - accepting a negotiation creates (or reuses) its Transaction and moves the
   match to CONTRACT_SIGNED
 - accepting an offer only closes the negotiation; no Transaction is created

Steps are committed one at a time. A crash between them can leave e.g. an
ACCEPTED negotiation whose match is still NEGOTIATING.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.config import settings
from tradelink.core.exceptions import InvalidStateError, NotFoundError
from tradelink.core.logger import get_logger
from tradelink.crud import negotiations as negotiation_crud
from tradelink.crud import transactions as transaction_crud
from tradelink.crud.audit_log import create_audit_log
from tradelink.crud.matches import get_match, update_match
from tradelink.models.enums import MatchStatus, NegotiationStatus, OfferStatus, UserRole
from tradelink.models.negotiation import Negotiation, Offer
from tradelink.services.profile_service import get_profiles

logger = get_logger(__name__)


# ----------------------------------------------------------
# NEGOTIATIONS
# ----------------------------------------------------------

async def create_negotiation(db: AsyncSession, data: Dict[str, Any], user_id: str) -> Negotiation:
    match = await get_match(db, data["match_id"])
    if not match:
        raise NotFoundError("Match not found")

    existing = await negotiation_crud.get_active_negotiation_for_match(db, match.id)
    if existing:
        raise InvalidStateError("Active negotiation already exists for this match")

    negotiation = await negotiation_crud.create_negotiation(db, {
        "match_id": match.id,
        "initial_price": data["initial_price"],
        "current_price": data["current_price"],
        "quantity": data["quantity"],
        "currency": data.get("currency") or settings.DEFAULT_CURRENCY,
        "terms": data.get("terms"),
        "delivery_terms": data.get("delivery_terms"),
        "payment_terms": data.get("payment_terms"),
        "initiated_by": data.get("initiated_by") or user_id,
        "last_updated_by": user_id,
        "expires_at": data.get("expires_at"),
        "status": NegotiationStatus.ACTIVE,
    })

    await update_match(db, match, {
        "status": MatchStatus.NEGOTIATING,
        "negotiation_started_at": datetime.utcnow(),
    })

    await create_audit_log(db, user_id, "negotiation", negotiation.id, "create", f"match={match.id}")
    logger.info(f"Negotiation created: {negotiation.id}", extra={"user_id": user_id, "entity_id": negotiation.id})
    return await get_negotiation(db, negotiation.id)


async def list_negotiations(
    db: AsyncSession,
    match_id: Optional[str] = None,
    user_id: Optional[str] = None,
) -> List[Negotiation]:
    if match_id:
        return await negotiation_crud.list_negotiations(db, match_id=match_id)

    if not user_id:
        return []

    farmer, buyer = await get_profiles(db, user_id)
    if not farmer and not buyer:
        return []

    return await negotiation_crud.list_negotiations(
        db,
        farmer_id=farmer.id if farmer else None,
        buyer_id=buyer.id if buyer else None,
    )


async def get_negotiation(db: AsyncSession, negotiation_id: str) -> Negotiation:
    negotiation = await negotiation_crud.get_negotiation(db, negotiation_id)
    if not negotiation:
        raise NotFoundError("Negotiation not found")
    return negotiation


async def accept_negotiation(db: AsyncSession, negotiation_id: str, user_id: str) -> Tuple[Negotiation, str]:
    """Returns the accepted negotiation and the id of its transaction."""
    negotiation = await get_negotiation(db, negotiation_id)
    if negotiation.status != NegotiationStatus.ACTIVE:
        raise InvalidStateError("Negotiation is not active")

    match = negotiation.match

    # a concurrent accept may already have written the transaction
    transaction = await transaction_crud.get_transaction_by_negotiation(db, negotiation.id)
    if not transaction:
        transaction = await transaction_crud.create_transaction(db, {
            "match_id": match.id,
            "negotiation_id": negotiation.id,
            "buyer_id": match.buyer_id,
            "quantity": negotiation.quantity,
            "agreed_price": negotiation.current_price,
            "total_value": negotiation.current_price * negotiation.quantity,
            "currency": negotiation.currency,
            "payment_status": "pending",
            "shipment_status": "pending",
        })
        logger.info(f"Transaction created: {transaction.id}", extra={"entity_id": negotiation.id})

    now = datetime.utcnow()
    await negotiation_crud.update_negotiation(db, negotiation, {
        "status": NegotiationStatus.ACCEPTED,
        "accepted_at": now,
        "last_updated_by": user_id,
    })

    await update_match(db, match, {
        "status": MatchStatus.CONTRACT_SIGNED,
        "contract_signed_at": now,
    })

    await create_audit_log(db, user_id, "negotiation", negotiation.id, "accept", f"transaction={transaction.id}")
    return await get_negotiation(db, negotiation.id), transaction.id


async def reject_negotiation(db: AsyncSession, negotiation_id: str, user_id: str) -> Negotiation:
    negotiation = await get_negotiation(db, negotiation_id)

    await negotiation_crud.update_negotiation(db, negotiation, {
        "status": NegotiationStatus.REJECTED,
        "rejected_at": datetime.utcnow(),
        "last_updated_by": user_id,
    })

    await create_audit_log(db, user_id, "negotiation", negotiation.id, "reject")
    return await get_negotiation(db, negotiation.id)


# ----------------------------------------------------------
# OFFERS
# ----------------------------------------------------------

async def create_offer(
    db: AsyncSession,
    negotiation_id: str,
    data: Dict[str, Any],
    user_id: str,
    role: Optional[str] = None,
) -> Offer:
    negotiation = await get_negotiation(db, negotiation_id)
    if negotiation.status != NegotiationStatus.ACTIVE:
        raise InvalidStateError("Negotiation is not active")

    try:
        offered_by_role = UserRole(data.get("offered_by_role") or role)
    except ValueError:
        raise InvalidStateError("Offer role could not be determined")

    offer = await negotiation_crud.create_offer(db, {
        "negotiation_id": negotiation.id,
        "offered_by": user_id,
        "offered_by_role": offered_by_role,
        "price": data["price"],
        "quantity": data["quantity"],
        "currency": data.get("currency") or negotiation.currency,
        "message": data.get("message"),
        "terms": data.get("terms"),
        "status": OfferStatus.PENDING,
    })

    await negotiation_crud.update_negotiation(db, negotiation, {
        "current_price": offer.price,
        "quantity": offer.quantity,
        "last_updated_by": user_id,
    })

    await create_audit_log(db, user_id, "offer", offer.id, "create", f"negotiation={negotiation.id} price={offer.price}")
    return offer


async def respond_to_offer(
    db: AsyncSession,
    offer_id: str,
    status: OfferStatus,
    user_id: str,
    response_message: Optional[str] = None,
) -> Offer:
    offer = await negotiation_crud.get_offer(db, offer_id)
    if not offer:
        raise NotFoundError("Offer not found")
    if offer.status != OfferStatus.PENDING:
        raise InvalidStateError("Offer is not pending")
    if status == OfferStatus.PENDING:
        raise InvalidStateError("Response status cannot be PENDING")

    offer = await negotiation_crud.update_offer(db, offer, {
        "status": status,
        "response_message": response_message,
        "responded_at": datetime.utcnow(),
    })

    if status == OfferStatus.ACCEPTED:
        # other PENDING offers are left as they are
        negotiation = await get_negotiation(db, offer.negotiation_id)
        await negotiation_crud.update_negotiation(db, negotiation, {
            "status": NegotiationStatus.ACCEPTED,
            "accepted_at": datetime.utcnow(),
            "last_updated_by": user_id,
        })

    await create_audit_log(db, user_id, "offer", offer.id, "respond", status.value)
    return offer
