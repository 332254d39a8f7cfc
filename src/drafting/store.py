import uuid
from datetime import datetime
from typing import List, Mapping, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.drafting.models import DraftSection, SectionKey
from src.projects.models import Project


class DraftStore:
    """Persistence for generated drafts.

    The orchestrator only talks to this interface, which keeps it testable
    against an in-memory store.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_project(self, project_id: UUID) -> Optional[Project]:
        return await self.db.get(Project, project_id)

    async def upsert_sections(self, project_id: UUID, sections: List[Tuple[SectionKey, str]]) -> None:
        """Create-or-replace every given section in a single statement."""
        now = datetime.utcnow()
        stmt = insert(DraftSection).values([
            {
                "id": uuid.uuid4(),
                "project_id": project_id,
                "section_key": key,
                "content": content,
                "created_at": now,
                "updated_at": now,
            }
            for key, content in sections
        ])
        stmt = stmt.on_conflict_do_update(
            constraint="uq_draft_sections_project_key",
            set_={"content": stmt.excluded.content, "updated_at": stmt.excluded.updated_at},
        )
        await self.db.execute(stmt)

    async def mark_interview_completed(self, project_id: UUID) -> None:
        await self.db.execute(
            update(Project).where(Project.id == project_id).values(interview_completed=True)
        )

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()

    async def list_sections(self, project_id: UUID) -> List[DraftSection]:
        result = await self.db.execute(
            select(DraftSection).where(DraftSection.project_id == project_id)
        )
        return list(result.scalars().all())

    async def sections_map(self, project_id: UUID) -> Mapping[str, str]:
        return {s.section_key.value: s.content for s in await self.list_sections(project_id)}
