"""Render module routes."""

from fastapi import APIRouter, Response

from webprint.shared.logging import get_logger
from .schemas import PAGE_PRESETS, PagePresetInfo, RenderPdfRequest
from .service import RenderService

logger = get_logger(__name__)
router = APIRouter(prefix="/render", tags=["render"])


@router.post("/pdf")
async def render_pdf(request: RenderPdfRequest) -> Response:
    """
    Render HTML to a paginated PDF.

    Returns the PDF as binary content. The page count is reported in the
    ``X-Page-Count`` header. Render failures are returned as JSON errors.
    """
    service = RenderService()

    result = await service.html_to_pdf(
        html=request.html,
        page_preset=request.page_preset,
        page_size=request.page_size,
        margins=request.margins,
        title=request.title,
    )

    return Response(
        content=result.pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": "attachment; filename=export.pdf",
            "Content-Length": str(len(result.pdf_bytes)),
            "X-Page-Count": str(result.page_count),
        }
    )


@router.get("/presets", response_model=list[PagePresetInfo])
async def list_presets() -> list[PagePresetInfo]:
    """List the named page sizes, in points."""
    return [
        PagePresetInfo(name=name, width=size.width, height=size.height)
        for name, size in PAGE_PRESETS.items()
    ]
