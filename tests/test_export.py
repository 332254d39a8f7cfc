import io
import uuid
from types import SimpleNamespace

import pytest
from docx import Document

from src.drafting.exceptions import NoDraftError, ProjectNotFoundError
from src.export.service import ExportService, build_docx

SECTIONS = {
    "CLAIMS": "1. A stake comprising a reservoir.\n\n2. The stake of claim 1, wherein the reservoir is glass.",
    "ABSTRACT": "A watering stake.",
    "TITLE": "Watering Stake",
    "BACKGROUND": "Plants die.\n\nTimers waste water.",
    "DRAWINGS": "",
}


def _texts(docx_bytes):
    return [p.text for p in Document(io.BytesIO(docx_bytes)).paragraphs]


def test_sections_appear_in_canonical_order_under_labels():
    texts = _texts(build_docx("Fallback", SECTIONS))
    headings = [t for t in texts if t in {
        "BACKGROUND OF THE INVENTION", "BRIEF DESCRIPTION OF DRAWINGS", "ABSTRACT", "CLAIMS",
    }]
    assert headings == ["BACKGROUND OF THE INVENTION", "ABSTRACT", "CLAIMS"]


def test_title_section_is_the_centred_title():
    texts = _texts(build_docx("Fallback", SECTIONS))
    assert "WATERING STAKE" in texts
    assert "FALLBACK" not in texts


def test_project_title_used_when_title_section_is_blank():
    texts = _texts(build_docx("Fallback", {**SECTIONS, "TITLE": "  "}))
    assert "FALLBACK" in texts


def test_paragraphs_and_claims_are_split():
    texts = _texts(build_docx("Fallback", SECTIONS))
    assert "Plants die." in texts
    assert "Timers waste water." in texts
    assert "What is claimed is:" in texts
    assert "1. A stake comprising a reservoir." in texts
    assert "2. The stake of claim 1, wherein the reservoir is glass." in texts


@pytest.mark.asyncio
async def test_export_without_sections_raises():
    store = SimpleNamespace()

    async def get_project(project_id):
        return SimpleNamespace(id=project_id, title="Stake")

    async def sections_map(project_id):
        return {}

    store.get_project = get_project
    store.sections_map = sections_map
    with pytest.raises(NoDraftError):
        await ExportService(None, store=store).generate_docx(uuid.uuid4())


@pytest.mark.asyncio
async def test_export_unknown_project_raises(db_session):
    db_session.get.return_value = None
    with pytest.raises(ProjectNotFoundError):
        await ExportService(db_session).generate_docx(uuid.uuid4())
