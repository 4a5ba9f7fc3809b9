# backend/tradelink/api/health.py

from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.database import check_database, get_db

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(db: AsyncSession = Depends(get_db)):
    dialect = await check_database(db)
    return {
        "status": "ok",
        "database": "connected",
        "dialect": dialect,
        "timestamp": datetime.utcnow().isoformat(),
    }
