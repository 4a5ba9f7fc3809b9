# backend/tradelink/api/matches.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.auth import get_current_user, require_roles
from tradelink.core.database import get_db
from tradelink.models.enums import MatchStatus
from tradelink.schemas.base import Message, Page
from tradelink.schemas.match import Match, MatchCreate, MatchStatusUpdate
from tradelink.services import match_service
from tradelink.services.ai_client import AiClient, get_ai_client

router = APIRouter(prefix="/matches", tags=["matches"])


@router.post("/suggest", response_model=List[Match], status_code=status.HTTP_201_CREATED)
async def suggest_matches(
    buyer_id: str = Query(..., alias="buyerId"),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    ai_client: AiClient = Depends(get_ai_client),
    user=Depends(get_current_user),
):
    return await match_service.suggest_matches(db, buyer_id, limit=limit, ai_client=ai_client)


@router.get("", response_model=Page[Match])
async def list_matches(
    farmer_id: Optional[str] = Query(None, alias="farmerId"),
    buyer_id: Optional[str] = Query(None, alias="buyerId"),
    listing_id: Optional[str] = Query(None, alias="listingId"),
    match_status: Optional[MatchStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    return await match_service.list_matches(
        db,
        farmer_id=farmer_id,
        buyer_id=buyer_id,
        listing_id=listing_id,
        status=match_status,
        page=page,
        limit=limit,
    )


@router.get("/{match_id}", response_model=Match)
async def get_match(match_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await match_service.get_match(db, match_id)


@router.post("", response_model=Match, status_code=status.HTTP_201_CREATED)
async def create_match(payload: MatchCreate, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await match_service.create_match(db, payload.model_dump(), user["sub"])


@router.patch("/{match_id}/status", response_model=Match)
async def update_match_status(
    match_id: str,
    payload: MatchStatusUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    return await match_service.update_match_status(db, match_id, payload.status, user["sub"])


@router.delete("/{match_id}", response_model=Message)
async def delete_match(match_id: str, db: AsyncSession = Depends(get_db), user=Depends(require_roles("ADMIN"))):
    await match_service.delete_match(db, match_id)
    return {"message": "Match deleted"}
