"""Render module - web content to paginated PDF."""

from .router import router
from .service import RenderService
from .schemas import PageMargins, PageSize, PrintableRect, RenderPdfRequest
from .job import RenderFailure, RenderResult, RenderSuccess

__all__ = [
    "router",
    "RenderService",
    "PageMargins",
    "PageSize",
    "PrintableRect",
    "RenderPdfRequest",
    "RenderFailure",
    "RenderResult",
    "RenderSuccess",
]
