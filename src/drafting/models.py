from enum import Enum
from sqlalchemy import Column, ForeignKey, Text, UniqueConstraint, Enum as SAEnum
from sqlalchemy.orm import relationship
from src.database import Base
from src.shared.models import AuditMixin


class SectionKey(str, Enum):
    TITLE = "TITLE"
    BACKGROUND = "BACKGROUND"
    SUMMARY = "SUMMARY"
    DRAWINGS = "DRAWINGS"
    DETAILED_DESC = "DETAILED_DESC"
    ABSTRACT = "ABSTRACT"
    CLAIMS = "CLAIMS"


# Canonical order for display and DOCX assembly
SECTION_ORDER = [
    SectionKey.TITLE,
    SectionKey.BACKGROUND,
    SectionKey.SUMMARY,
    SectionKey.DRAWINGS,
    SectionKey.DETAILED_DESC,
    SectionKey.ABSTRACT,
    SectionKey.CLAIMS,
]

# The six specification sections; CLAIMS is drafted by its own call
DRAFT_SECTION_KEYS = SECTION_ORDER[:-1]

SECTION_LABELS = {
    SectionKey.TITLE: "Title of Invention",
    SectionKey.BACKGROUND: "Background of the Invention",
    SectionKey.SUMMARY: "Summary of the Invention",
    SectionKey.DRAWINGS: "Brief Description of Drawings",
    SectionKey.DETAILED_DESC: "Detailed Description of Embodiments",
    SectionKey.ABSTRACT: "Abstract",
    SectionKey.CLAIMS: "Claims",
}


class DraftSection(Base, AuditMixin):
    __tablename__ = "draft_sections"
    __table_args__ = (
        UniqueConstraint("project_id", "section_key", name="uq_draft_sections_project_key"),
    )

    project_id = Column(ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    section_key = Column(SAEnum(SectionKey), nullable=False)
    content = Column(Text, nullable=False, default="")

    project = relationship("src.projects.models.Project", back_populates="sections")
