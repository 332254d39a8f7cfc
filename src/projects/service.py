import logging
import uuid
from datetime import datetime
from typing import Dict, List, Mapping
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.drafting.exceptions import ProjectNotFoundError
from src.projects.models import InterviewAnswer, InterviewQuestion, Project
from src.projects.schemas import ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_project(self, data: ProjectCreate) -> Project:
        project = Project(
            title=data.title,
            jurisdiction=data.jurisdiction,
            owner_id=data.owner_id,
            intake_notes=data.intake_notes,
        )
        self.db.add(project)
        await self.db.commit()
        await self.db.refresh(project)
        logger.info(f"Created project {project.id}")
        return project

    async def get_project(self, project_id: UUID) -> Project:
        project = await self.db.get(Project, project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def list_projects(self, owner_id: str) -> List[Project]:
        query = (
            select(Project)
            .where(Project.owner_id == owner_id)
            .order_by(Project.updated_at.desc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_project(self, project_id: UUID, data: ProjectUpdate) -> Project:
        project = await self.get_project(project_id)

        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(project, field, value)

        await self.db.commit()
        await self.db.refresh(project)
        return project

    async def delete_project(self, project_id: UUID) -> None:
        """Answers, questions, sections and issues go with it via ON DELETE CASCADE."""
        project = await self.get_project(project_id)
        await self.db.delete(project)
        await self.db.commit()
        logger.info(f"Deleted project {project_id}")

    async def get_answers(self, project_id: UUID) -> Dict[str, str]:
        result = await self.db.execute(
            select(InterviewAnswer).where(InterviewAnswer.project_id == project_id)
        )
        return {a.question_key: a.answer for a in result.scalars().all()}

    async def save_answers(self, project_id: UUID, answers: Mapping[str, str]) -> Dict[str, str]:
        """Create or overwrite the given static answers; other keys are left alone."""
        await self.get_project(project_id)
        if answers:
            now = datetime.utcnow()
            stmt = insert(InterviewAnswer).values([
                {
                    "id": uuid.uuid4(),
                    "project_id": project_id,
                    "question_key": key,
                    "answer": value,
                    "created_at": now,
                    "updated_at": now,
                }
                for key, value in answers.items()
            ])
            stmt = stmt.on_conflict_do_update(
                constraint="uq_interview_answers_project_key",
                set_={"answer": stmt.excluded.answer, "updated_at": stmt.excluded.updated_at},
            )
            await self.db.execute(stmt)
            await self.db.commit()
        return await self.get_answers(project_id)

    async def answer_question(self, project_id: UUID, question_id: UUID, answer: str) -> InterviewQuestion:
        result = await self.db.execute(
            select(InterviewQuestion).where(
                InterviewQuestion.id == question_id,
                InterviewQuestion.project_id == project_id,
            )
        )
        question = result.scalar_one_or_none()
        if question is None:
            raise ValueError(f"Question {question_id} not found for project {project_id}")
        question.answer = answer
        await self.db.commit()
        await self.db.refresh(question)
        return question
