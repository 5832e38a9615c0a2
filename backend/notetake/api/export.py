from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from notetake.api.deps import get_pdf_renderer
from notetake.models.media import ExportPdfRequest
from notetake.services.pdf_renderer import PlaywrightPdfRenderer
from notetake.utils.logging import get_logger

router = APIRouter(prefix="/api", tags=["export"])
logger = get_logger(__name__)


@router.post("/export-pdf")
async def export_pdf(
    payload: ExportPdfRequest,
    renderer: PlaywrightPdfRenderer = Depends(get_pdf_renderer),
) -> Response:
    if not payload.html:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Missing html content in request body"
        )

    try:
        pdf = await renderer.render(payload.html)
    except Exception as err:
        logger.error("PDF export error", extra={"error": str(err)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate PDF"
        ) from err

    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": "attachment; filename=export.pdf"},
    )
