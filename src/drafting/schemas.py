from datetime import datetime
from typing import List
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from src.drafting.models import SectionKey


class WrittenSection(BaseModel):
    section_key: SectionKey
    content: str


class DraftResult(BaseModel):
    success: bool = True
    pipeline: str = Field(..., description="'static' or 'dynamic' interview source")
    sections: List[WrittenSection] = Field(description="Six specification sections, then CLAIMS")


class DraftSectionResponse(BaseModel):
    id: UUID
    project_id: UUID
    section_key: SectionKey
    content: str
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DraftSectionUpdate(BaseModel):
    content: str
