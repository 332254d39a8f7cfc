from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.usage.schemas import UsageSummary
from src.usage.service import UsageService

router = APIRouter(prefix="/usage", tags=["usage"])


@router.get("", response_model=UsageSummary)
async def get_usage(
    owner_id: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
):
    service = UsageService(db)
    return await service.summary(owner_id)
