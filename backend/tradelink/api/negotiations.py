# backend/tradelink/api/negotiations.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.auth import get_current_user
from tradelink.core.database import get_db
from tradelink.schemas.negotiation import (
    NegotiationAccepted,
    NegotiationCreate,
    NegotiationDetail,
    Offer,
    OfferCreate,
    OfferRespond,
)
from tradelink.services import negotiation_service

router = APIRouter(prefix="/negotiations", tags=["negotiations"])


@router.post("", response_model=NegotiationDetail, status_code=status.HTTP_201_CREATED)
async def create_negotiation(
    payload: NegotiationCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    return await negotiation_service.create_negotiation(db, payload.model_dump(), user["sub"])


@router.get("", response_model=List[NegotiationDetail])
async def list_negotiations(
    match_id: Optional[str] = Query(None, alias="matchId"),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    return await negotiation_service.list_negotiations(db, match_id=match_id, user_id=user["sub"])


# declared before /{negotiation_id} routes so "offers" is not read as an id
@router.patch("/offers/{offer_id}/respond", response_model=Offer)
async def respond_to_offer(
    offer_id: str,
    payload: OfferRespond,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    return await negotiation_service.respond_to_offer(
        db, offer_id, payload.status, user["sub"], response_message=payload.response_message
    )


@router.get("/{negotiation_id}", response_model=NegotiationDetail)
async def get_negotiation(negotiation_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await negotiation_service.get_negotiation(db, negotiation_id)


@router.post("/{negotiation_id}/offers", response_model=Offer, status_code=status.HTTP_201_CREATED)
async def create_offer(
    negotiation_id: str,
    payload: OfferCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    return await negotiation_service.create_offer(
        db, negotiation_id, payload.model_dump(), user["sub"], role=user.get("role")
    )


@router.post("/{negotiation_id}/accept", response_model=NegotiationAccepted)
async def accept_negotiation(negotiation_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    negotiation, transaction_id = await negotiation_service.accept_negotiation(db, negotiation_id, user["sub"])
    detail = NegotiationDetail.model_validate(negotiation).model_dump()
    return NegotiationAccepted(**detail, transaction_id=transaction_id)


@router.post("/{negotiation_id}/reject", response_model=NegotiationDetail)
async def reject_negotiation(negotiation_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await negotiation_service.reject_negotiation(db, negotiation_id, user["sub"])
