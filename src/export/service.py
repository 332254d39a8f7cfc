import io
import re
from datetime import date
from typing import Mapping
from uuid import UUID

from docx import Document as DocxDocument
from docx.shared import Pt, Inches, RGBColor
from docx.enum.text import WD_ALIGN_PARAGRAPH
from sqlalchemy.ext.asyncio import AsyncSession

from src.drafting.exceptions import NoDraftError, ProjectNotFoundError
from src.drafting.models import SECTION_LABELS, SECTION_ORDER, SectionKey
from src.drafting.store import DraftStore

CONFIDENTIAL_BANNER = "CONFIDENTIAL — ATTORNEY-CLIENT PRIVILEGED (IF APPLICABLE)"
NOT_LEGAL_ADVICE_BANNER = "NOT LEGAL ADVICE — FOR INFORMATIONAL PURPOSES ONLY"

_CLAIM_START_RE = re.compile(r"^(\d+)\.\s*(.*)$")


def build_docx(project_title: str, sections: Mapping[str, str]) -> bytes:
    """Assemble the provisional application in canonical section order."""
    doc = DocxDocument()

    style = doc.styles["Normal"]
    style.font.name = "Times New Roman"
    style.font.size = Pt(12)
    for section in doc.sections:
        section.top_margin = section.bottom_margin = Inches(1)
        section.left_margin = section.right_margin = Inches(1)

    title = (sections.get(SectionKey.TITLE.value) or "").strip() or project_title
    _add_title_page(doc, title)

    for key in SECTION_ORDER:
        if key == SectionKey.TITLE:
            continue
        content = sections.get(key.value) or ""
        if not content.strip():
            continue
        doc.add_heading(SECTION_LABELS[key].upper(), level=1)
        if key == SectionKey.CLAIMS:
            _add_claims(doc, content)
        else:
            _add_paragraphs(doc, content)

    buffer = io.BytesIO()
    doc.save(buffer)
    buffer.seek(0)
    return buffer.read()


def _add_title_page(doc: DocxDocument, title: str):
    for banner in (CONFIDENTIAL_BANNER, NOT_LEGAL_ADVICE_BANNER):
        p = doc.add_paragraph()
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER
        run = p.add_run(banner)
        run.bold = True
        run.font.size = Pt(10)
        run.font.color.rgb = RGBColor(0xCC, 0x00, 0x00)

    doc.add_paragraph()  # spacer

    p = doc.add_paragraph()
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = p.add_run(title.upper())
    run.bold = True
    run.font.size = Pt(16)

    p = doc.add_paragraph()
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = p.add_run("Provisional Patent Application")
    run.italic = True

    p = doc.add_paragraph()
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    p.add_run(f"Date: {date.today().strftime('%B %d, %Y')}")

    doc.add_page_break()


def _add_paragraphs(doc: DocxDocument, content: str):
    for block in content.split("\n\n"):
        text = block.strip()
        if text:
            p = doc.add_paragraph(text)
            p.paragraph_format.space_after = Pt(10)


def _add_claims(doc: DocxDocument, content: str):
    intro = doc.add_paragraph()
    intro.add_run("What is claimed is:").italic = True

    for line in content.splitlines():
        text = line.strip()
        if not text:
            continue
        p = doc.add_paragraph()
        match = _CLAIM_START_RE.match(text)
        if match:
            p.add_run(f"{match.group(1)}. ").bold = True
            p.add_run(match.group(2))
            p.paragraph_format.left_indent = Inches(0.25)
        else:
            p.add_run(text)
        p.paragraph_format.space_after = Pt(6)


class ExportService:
    def __init__(self, db: AsyncSession, store: DraftStore = None):
        self.db = db
        self.store = store or DraftStore(db)

    async def generate_docx(self, project_id: UUID) -> bytes:
        project = await self.store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)

        sections = await self.store.sections_map(project_id)
        if not sections:
            raise NoDraftError()

        return build_docx(project.title, sections)
