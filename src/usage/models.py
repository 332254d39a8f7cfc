from sqlalchemy import Column, String, ForeignKey, Index, Integer
from src.database import Base
from src.shared.models import AuditMixin


class TokenUsage(Base, AuditMixin):
    __tablename__ = "token_usage"
    __table_args__ = (
        Index("ix_token_usage_owner_created", "owner_id", "created_at"),
    )

    owner_id = Column(String, nullable=False, index=True)
    project_id = Column(ForeignKey("projects.id", ondelete="SET NULL"), nullable=True, index=True)
    operation = Column(String, nullable=False)  # DRAFT_SECTIONS, CLAIMS, INTAKE_EXTRACTION, QUESTION_GENERATION, QUALITY_CHECK
    model = Column(String, nullable=False)
    prompt_tokens = Column(Integer, nullable=False, default=0)
    completion_tokens = Column(Integer, nullable=False, default=0)
    total_tokens = Column(Integer, nullable=False, default=0)
