# backend/tradelink/api/export_companies.py

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.auth import get_current_user
from tradelink.core.database import get_db
from tradelink.crud import export_companies as company_crud
from tradelink.crud.common import page_meta
from tradelink.schemas.base import Message, Page
from tradelink.schemas.export_company import ExportCompany, ExportCompanyCreate, ExportCompanyUpdate

router = APIRouter(prefix="/export-companies", tags=["export-companies"])


async def _get_or_404(db: AsyncSession, company_id: str):
    company = await company_crud.get_export_company(db, company_id)
    if not company:
        raise HTTPException(status_code=404, detail="Export company not found")
    return company


async def _check_registration(db: AsyncSession, registration_no: str, company_id: str = None):
    existing = await company_crud.get_export_company_by_registration(db, registration_no)
    if existing and existing.id != company_id:
        raise HTTPException(status_code=400, detail="Registration number already in use")


@router.post("", response_model=ExportCompany, status_code=status.HTTP_201_CREATED)
async def create_export_company(
    payload: ExportCompanyCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    if await company_crud.get_export_company_by_user(db, payload.user_id):
        raise HTTPException(status_code=400, detail="Export company profile already exists for this user")
    await _check_registration(db, payload.registration_no)
    return await company_crud.create_export_company(db, payload.model_dump())


@router.get("", response_model=Page[ExportCompany])
async def list_export_companies(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    rows, total = await company_crud.list_export_companies(db, page=page, limit=limit)
    return {"data": rows, "meta": page_meta(total, page, limit)}


@router.get("/user/{user_id}", response_model=ExportCompany)
async def get_export_company_by_user(user_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    company = await company_crud.get_export_company_by_user(db, user_id)
    if not company:
        raise HTTPException(status_code=404, detail="Export company not found")
    return company


@router.get("/{company_id}", response_model=ExportCompany)
async def get_export_company(company_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await _get_or_404(db, company_id)


@router.patch("/{company_id}", response_model=ExportCompany)
async def update_export_company(
    company_id: str,
    payload: ExportCompanyUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    company = await _get_or_404(db, company_id)
    if payload.registration_no:
        await _check_registration(db, payload.registration_no, company.id)
    return await company_crud.update_export_company(db, company, payload.model_dump(exclude_unset=True))


@router.delete("/{company_id}", response_model=Message)
async def delete_export_company(company_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    company = await _get_or_404(db, company_id)
    await company_crud.delete_export_company(db, company)
    return {"message": "Export company deleted"}
