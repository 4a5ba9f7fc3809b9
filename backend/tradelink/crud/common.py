# backend/tradelink/crud/common.py

import math
from typing import Any, Dict, List, Tuple

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession


async def paginate(db: AsyncSession, stmt: Select, page: int = 1, limit: int = 20) -> Tuple[List[Any], int]:
    page = max(page or 1, 1)
    limit = max(limit or 20, 1)

    total = await db.scalar(select(func.count()).select_from(stmt.order_by(None).subquery()))
    rows = await db.scalars(stmt.offset((page - 1) * limit).limit(limit))
    return rows.all(), total or 0


def page_meta(total: int, page: int, limit: int) -> Dict[str, int]:
    page = max(page or 1, 1)
    limit = max(limit or 20, 1)
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit),
    }


def apply_updates(obj: Any, updates: Dict[str, Any]) -> Any:
    for field, value in updates.items():
        setattr(obj, field, value)
    return obj
