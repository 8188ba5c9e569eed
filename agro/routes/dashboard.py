"""Dashboard aggregate routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from agro.database import get_db
from agro.schemas.dashboard import DashboardRead
from agro.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardRead)
async def get_dashboard(db: AsyncSession = Depends(get_db)) -> DashboardRead:
	return await DashboardService(db).summary()
