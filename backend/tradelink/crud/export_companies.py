# backend/tradelink/crud/export_companies.py

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.crud.common import apply_updates, paginate
from tradelink.models.export_company import ExportCompany


async def create_export_company(db: AsyncSession, data: Dict[str, Any]) -> ExportCompany:
    company = ExportCompany(**data)
    db.add(company)
    await db.commit()
    return await get_export_company(db, company.id)


async def get_export_company(db: AsyncSession, company_id: str) -> Optional[ExportCompany]:
    return await db.scalar(
        select(ExportCompany)
        .where(ExportCompany.id == company_id)
        .execution_options(populate_existing=True)
    )


async def get_export_company_by_user(db: AsyncSession, user_id: str) -> Optional[ExportCompany]:
    return await db.scalar(select(ExportCompany).where(ExportCompany.user_id == user_id))


async def get_export_company_by_registration(db: AsyncSession, registration_no: str) -> Optional[ExportCompany]:
    return await db.scalar(select(ExportCompany).where(ExportCompany.registration_no == registration_no))


async def list_export_companies(db: AsyncSession, page: int = 1, limit: int = 20) -> Tuple[List[ExportCompany], int]:
    q = select(ExportCompany).order_by(ExportCompany.created_at.desc())
    return await paginate(db, q, page, limit)


async def update_export_company(db: AsyncSession, company: ExportCompany, updates: Dict[str, Any]) -> ExportCompany:
    apply_updates(company, updates)
    await db.commit()
    return await get_export_company(db, company.id)


async def delete_export_company(db: AsyncSession, company: ExportCompany) -> None:
    await db.delete(company)
    await db.commit()
