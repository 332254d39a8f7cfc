import io
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.drafting.exceptions import DraftingError
from src.export.service import ExportService
from src.shared.errors import to_http_exception

router = APIRouter(prefix="/projects", tags=["export"])


@router.get("/{project_id}/export/docx")
async def export_docx(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    service = ExportService(db)
    try:
        docx_bytes = await service.generate_docx(project_id)
    except DraftingError as e:
        raise to_http_exception(e)

    return StreamingResponse(
        io.BytesIO(docx_bytes),
        media_type="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        headers={"Content-Disposition": f"attachment; filename=provisional_{project_id}.docx"},
    )
