from enum import Enum
from sqlalchemy import Column, ForeignKey, Integer, Text, Enum as SAEnum
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from src.database import Base
from src.shared.models import AuditMixin


class IssueType(str, Enum):
    MISSING_SUPPORT = "MISSING_SUPPORT"
    VAGUE_TERM = "VAGUE_TERM"
    ANTECEDENT_BASIS = "ANTECEDENT_BASIS"
    TERM_CONSISTENCY = "TERM_CONSISTENCY"


class IssueSeverity(str, Enum):
    HIGH = "HIGH"
    MED = "MED"
    LOW = "LOW"


class QualityIssue(Base, AuditMixin):
    __tablename__ = "quality_issues"

    project_id = Column(ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(SAEnum(IssueType, name="quality_issue_type"), nullable=False)
    severity = Column(SAEnum(IssueSeverity, name="quality_issue_severity"), nullable=False)
    message = Column(Text, nullable=False)
    # Index in the merged list: AI issues first, then heuristics
    position = Column(Integer, nullable=False, default=0)
    # "metadata" is reserved on declarative classes
    issue_metadata = Column("metadata", JSONB, nullable=False, default=dict)

    project = relationship("src.projects.models.Project", back_populates="quality_issues")
