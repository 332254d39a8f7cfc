from enum import Enum
from sqlalchemy import Column, String, ForeignKey, Boolean, Integer, Text, UniqueConstraint, Enum as SAEnum
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from src.database import Base
from src.shared.models import AuditMixin


class AnswerType(str, Enum):
    TEXT = "TEXT"
    BULLETS = "BULLETS"
    LONGTEXT = "LONGTEXT"


class Project(Base, AuditMixin):
    __tablename__ = "projects"

    title = Column(String, nullable=False)
    jurisdiction = Column(String, nullable=False, default="US")
    owner_id = Column(String, nullable=True, index=True)

    # Intake (dynamic interview)
    intake_notes = Column(Text, nullable=True)
    extracted_json = Column(JSONB, nullable=True)
    intake_summary = Column(Text, nullable=True)

    interview_completed = Column(Boolean, default=False, nullable=False)

    answers = relationship("InterviewAnswer", back_populates="project", cascade="all, delete-orphan", passive_deletes=True)
    questions = relationship(
        "InterviewQuestion",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="InterviewQuestion.order",
    )
    sections = relationship(
        "src.drafting.models.DraftSection",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    quality_issues = relationship(
        "src.quality.models.QualityIssue",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class InterviewAnswer(Base, AuditMixin):
    """One answer of the static questionnaire, keyed by question key."""
    __tablename__ = "interview_answers"
    __table_args__ = (
        UniqueConstraint("project_id", "question_key", name="uq_interview_answers_project_key"),
    )

    project_id = Column(ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    question_key = Column(String, nullable=False)
    answer = Column(Text, nullable=False, default="")

    project = relationship("Project", back_populates="answers")


class InterviewQuestion(Base, AuditMixin):
    """An AI-generated question of the dynamic interview, with its answer."""
    __tablename__ = "interview_questions"

    project_id = Column(ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    order = Column(Integer, nullable=False)
    category = Column(String, nullable=False)
    prompt = Column(Text, nullable=False)
    help_text = Column(Text, nullable=True)
    answer_type = Column(SAEnum(AnswerType), default=AnswerType.LONGTEXT, nullable=False)
    required = Column(Boolean, default=False, nullable=False)
    answer = Column(Text, nullable=True)

    project = relationship("Project", back_populates="questions")
