from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.drafting.exceptions import DraftingError
from src.quality.schemas import QualityCheckResponse, QualityIssueResponse
from src.quality.service import QualityService
from src.shared.errors import to_http_exception

router = APIRouter(prefix="/projects", tags=["quality"])


@router.post("/{project_id}/quality", response_model=QualityCheckResponse)
async def run_quality_check(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = QualityService(db)
    try:
        issues = await service.run_quality_check(project_id)
    except DraftingError as e:
        raise to_http_exception(e)
    return QualityCheckResponse(issues=issues)


@router.get("/{project_id}/quality", response_model=List[QualityIssueResponse])
async def list_quality_issues(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = QualityService(db)
    return await service.list_issues(project_id)
