import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.agents.intake.agent import IntakeAgentState, intake_agent
from src.drafting.exceptions import NoIntakeNotesError, ProjectNotFoundError
from src.llm.client import TokenUsageData
from src.projects.models import InterviewQuestion, Project
from src.usage.service import UsageService

logger = logging.getLogger(__name__)


class IntakeService:
    def __init__(self, db: AsyncSession, usage: Optional[UsageService] = None):
        self.db = db
        self.usage = usage or UsageService(db)

    async def save_notes(self, project_id: UUID, notes: str) -> Project:
        project = await self.db.get(Project, project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        project.intake_notes = notes
        await self.db.commit()
        await self.db.refresh(project)
        return project

    async def generate_questions(self, project_id: UUID) -> List[InterviewQuestion]:
        """
        Build the dynamic interview for a project from its intake notes.

        The extraction is stored on the project as soon as it is parsed; the
        previous question set is replaced only once new questions validate.
        """
        project = await self.db.get(Project, project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        if not project.intake_notes:
            raise NoIntakeNotesError()
        owner_id = project.owner_id

        async def on_usage(operation: str, usage: TokenUsageData) -> None:
            await self.usage.log_usage(owner_id, operation, usage, project_id=project_id)

        async def on_extracted(extracted: Dict[str, Any]) -> None:
            summary = extracted.get("solution")
            await self.db.execute(
                update(Project)
                .where(Project.id == project_id)
                .values(
                    extracted_json=extracted,
                    intake_summary=summary if isinstance(summary, str) else None,
                )
            )
            await self.db.commit()

        initial_state: IntakeAgentState = {
            "notes": project.intake_notes,
            "pdf_text": None,
            "transcript": None,
            "extracted": None,
            "questions": None,
        }
        final_state = await intake_agent.ainvoke(
            initial_state,
            config={"configurable": {"on_usage": on_usage, "on_extracted": on_extracted}},
        )

        try:
            await self.db.execute(delete(InterviewQuestion).where(InterviewQuestion.project_id == project_id))
            for q in final_state["questions"]:
                self.db.add(InterviewQuestion(
                    project_id=project_id,
                    order=q.order,
                    category=q.category,
                    prompt=q.prompt,
                    help_text=q.help_text,
                    answer_type=q.answer_type,
                    required=q.required,
                ))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info("Stored %d interview questions for project %s", len(final_state["questions"]), project_id)
        return await self.list_questions(project_id)

    async def list_questions(self, project_id: UUID) -> List[InterviewQuestion]:
        result = await self.db.execute(
            select(InterviewQuestion)
            .where(InterviewQuestion.project_id == project_id)
            .order_by(InterviewQuestion.order)
        )
        return list(result.scalars().all())
