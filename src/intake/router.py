import logging
from typing import List
from uuid import UUID
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.drafting.exceptions import DraftingError
from src.intake.service import IntakeService
from src.projects.schemas import IntakeNotesUpdate, InterviewQuestionResponse, ProjectResponse
from src.shared.errors import to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["intake"])


@router.put("/{project_id}/intake", response_model=ProjectResponse)
async def save_intake_notes(
    project_id: UUID,
    request: IntakeNotesUpdate,
    db: AsyncSession = Depends(get_db),
):
    service = IntakeService(db)
    try:
        return await service.save_notes(project_id, request.intake_notes)
    except DraftingError as e:
        raise to_http_exception(e)


@router.post("/{project_id}/generate-questions", response_model=List[InterviewQuestionResponse])
async def generate_questions(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = IntakeService(db)
    try:
        return await service.generate_questions(project_id)
    except DraftingError as e:
        raise to_http_exception(e)
    except Exception:
        logger.exception(f"Question generation failed for project {project_id}")
        raise HTTPException(status_code=500, detail="Question generation failed. Please try again.")


@router.get("/{project_id}/questions", response_model=List[InterviewQuestionResponse])
async def list_questions(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = IntakeService(db)
    return await service.list_questions(project_id)
