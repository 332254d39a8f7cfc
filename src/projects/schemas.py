from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.interview.questions import QUESTION_KEYS, Completeness
from src.projects.models import AnswerType


class ProjectCreate(BaseModel):
    title: str = Field(..., min_length=1)
    jurisdiction: str = "US"
    owner_id: Optional[str] = Field(None, description="Opaque caller id used for token accounting")
    intake_notes: Optional[str] = None


class ProjectUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    jurisdiction: Optional[str] = Field(None, min_length=1)


class ProjectResponse(BaseModel):
    id: UUID
    title: str
    jurisdiction: str
    owner_id: Optional[str] = None
    intake_notes: Optional[str] = None
    extracted_json: Optional[Dict[str, Any]] = None
    intake_summary: Optional[str] = None
    interview_completed: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AnswersUpdate(BaseModel):
    answers: Dict[str, str]

    @field_validator("answers")
    @classmethod
    def known_keys_only(cls, v: Dict[str, str]) -> Dict[str, str]:
        unknown = sorted(set(v) - set(QUESTION_KEYS))
        if unknown:
            raise ValueError(f"Unknown question keys: {', '.join(unknown)}")
        return v


class AnswersResponse(BaseModel):
    answers: Dict[str, str]
    completeness: Completeness


class IntakeNotesUpdate(BaseModel):
    intake_notes: str = Field(..., min_length=1)


class QuestionAnswerUpdate(BaseModel):
    answer: str


class InterviewQuestionResponse(BaseModel):
    id: UUID
    order: int
    category: str
    prompt: str
    help_text: Optional[str] = None
    answer_type: AnswerType
    required: bool
    answer: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
