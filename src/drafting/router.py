import logging
from typing import List
from uuid import UUID
from fastapi import APIRouter, HTTPException, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.agents.drafting.prompts import DEFAULT_SYSTEM_PROMPT
from src.database import get_db
from src.drafting.exceptions import DraftingError, ProjectNotFoundError
from src.drafting.models import SectionKey
from src.drafting.schemas import DraftResult, DraftSectionResponse, DraftSectionUpdate
from src.drafting.service import DraftingService
from src.shared.errors import to_http_exception
from src.usage.service import UsageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["drafting"])


def get_system_prompt(request: Request) -> str:
    """The patent-writer system prompt loaded at startup."""
    return getattr(request.app.state, "system_prompt", DEFAULT_SYSTEM_PROMPT)


@router.post("/{project_id}/generate", response_model=DraftResult)
async def generate_draft_endpoint(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    system_prompt: str = Depends(get_system_prompt),
):
    service = DraftingService(db, system_prompt=system_prompt)
    try:
        project = await service.store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)

        rate = await UsageService(db).check_rate_limit(project.owner_id)
        if not rate.allowed:
            raise HTTPException(
                status_code=429,
                detail={
                    "error": "Daily limit reached",
                    "used": rate.used,
                    "remaining": rate.remaining,
                    "reset_at": rate.reset_at.isoformat(),
                },
            )

        return await service.generate(project_id)
    except HTTPException:
        raise
    except DraftingError as e:
        raise to_http_exception(e)
    except Exception:
        logger.exception(f"Draft generation failed for project {project_id}")
        raise HTTPException(status_code=500, detail="Draft generation failed")


@router.get("/{project_id}/sections", response_model=List[DraftSectionResponse])
async def list_sections(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = DraftingService(db)
    return await service.list_sections(project_id)


@router.put("/{project_id}/sections/{section_key}", response_model=DraftSectionResponse)
async def update_section(
    project_id: UUID,
    section_key: SectionKey,
    request: DraftSectionUpdate,
    db: AsyncSession = Depends(get_db),
):
    service = DraftingService(db)
    try:
        project = await service.store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return await service.update_section(project_id, section_key, request.content)
    except DraftingError as e:
        raise to_http_exception(e)
