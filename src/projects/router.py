from typing import List
from uuid import UUID
from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.drafting.exceptions import DraftingError
from src.interview.questions import compute_completeness
from src.projects.schemas import (
    AnswersResponse,
    AnswersUpdate,
    InterviewQuestionResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    QuestionAnswerUpdate,
)
from src.projects.service import ProjectService
from src.shared.errors import to_http_exception

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    project_in: ProjectCreate,
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    return await service.create_project(project_in)


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    owner_id: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
):
    """Projects for one owner, most recently updated first."""
    service = ProjectService(db)
    return await service.list_projects(owner_id)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    try:
        return await service.get_project(project_id)
    except DraftingError as e:
        raise to_http_exception(e)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    project_in: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    try:
        return await service.update_project(project_id, project_in)
    except DraftingError as e:
        raise to_http_exception(e)


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    try:
        await service.delete_project(project_id)
    except DraftingError as e:
        raise to_http_exception(e)


@router.get("/{project_id}/answers", response_model=AnswersResponse)
async def get_answers(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    answers = await service.get_answers(project_id)
    return AnswersResponse(answers=answers, completeness=compute_completeness(answers))


@router.put("/{project_id}/answers", response_model=AnswersResponse)
async def save_answers(
    project_id: UUID,
    request: AnswersUpdate,
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    try:
        answers = await service.save_answers(project_id, request.answers)
    except DraftingError as e:
        raise to_http_exception(e)
    return AnswersResponse(answers=answers, completeness=compute_completeness(answers))


@router.put("/{project_id}/questions/{question_id}/answer", response_model=InterviewQuestionResponse)
async def answer_question(
    project_id: UUID,
    question_id: UUID,
    request: QuestionAnswerUpdate,
    db: AsyncSession = Depends(get_db),
):
    service = ProjectService(db)
    try:
        return await service.answer_question(project_id, question_id, request.answer)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
