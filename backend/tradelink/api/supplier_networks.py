# backend/tradelink/api/supplier_networks.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.auth import get_current_user
from tradelink.core.database import get_db
from tradelink.models.enums import RelationshipStatus, RelationshipType
from tradelink.schemas.base import Message, Page
from tradelink.schemas.supplier_network import (
    SupplierNetwork,
    SupplierNetworkCreate,
    SupplierNetworkDetail,
    SupplierNetworkStats,
    SupplierNetworkUpdate,
    SupplierNetworkWithMetrics,
)
from tradelink.services import supplier_network_service

router = APIRouter(prefix="/supplier-networks", tags=["supplier-networks"])


@router.post("", response_model=SupplierNetwork, status_code=status.HTTP_201_CREATED)
async def add_supplier(payload: SupplierNetworkCreate, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await supplier_network_service.add_supplier(db, payload.model_dump(), user["sub"])


@router.get("", response_model=Page[SupplierNetworkWithMetrics])
async def list_suppliers(
    network_status: Optional[RelationshipStatus] = Query(None, alias="status"),
    relationship_type: Optional[RelationshipType] = Query(None, alias="relationshipType"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    result = await supplier_network_service.list_suppliers(
        db, user["sub"], status=network_status, relationship_type=relationship_type, page=page, limit=limit
    )
    data = [
        SupplierNetworkWithMetrics(**SupplierNetwork.model_validate(network).model_dump(), metrics=metrics)
        for network, metrics in result["data"]
    ]
    return {"data": data, "meta": result["meta"]}


@router.get("/stats", response_model=SupplierNetworkStats)
async def supplier_stats(db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await supplier_network_service.supplier_stats(db, user["sub"])


@router.get("/{network_id}", response_model=SupplierNetworkDetail)
async def get_supplier(network_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    network, history = await supplier_network_service.get_supplier(db, network_id)
    return SupplierNetworkDetail(**SupplierNetwork.model_validate(network).model_dump(), transaction_history=history)


@router.patch("/{network_id}", response_model=SupplierNetwork)
async def update_supplier(
    network_id: str,
    payload: SupplierNetworkUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    return await supplier_network_service.update_supplier(
        db, network_id, payload.model_dump(exclude_unset=True), user["sub"]
    )


@router.delete("/{network_id}", response_model=Message)
async def delete_supplier(network_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    await supplier_network_service.remove_supplier(db, network_id, user["sub"])
    return {"message": "Supplier removed from network"}
