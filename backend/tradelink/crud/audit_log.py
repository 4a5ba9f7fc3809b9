from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.models.audit_log import AuditLog


async def create_audit_log(db: AsyncSession, user_id: Optional[str], entity_type: str, entity_id: str, action: str, detail: str = ""):
    entry = AuditLog(
        user_id=user_id,
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        detail=detail,
    )
    db.add(entry)
    await db.commit()
    return entry


async def list_audit_logs(db: AsyncSession, entity_type: str, entity_id: str) -> List[AuditLog]:
    rows = await db.scalars(
        select(AuditLog)
        .where(AuditLog.entity_type == entity_type, AuditLog.entity_id == entity_id)
        .order_by(AuditLog.created_at)
    )
    return rows.all()
