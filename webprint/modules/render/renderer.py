"""Page renderer - draws one page slice into the PDF canvas."""

from reportlab.pdfgen.canvas import Canvas

from webprint.shared.errors import DrawError
from webprint.shared.logging import get_logger

from .schemas import PageSize, PrintableRect
from .sources.base import ContentSource

logger = get_logger(__name__)


class PageRenderer:
    """Clip, translate and hand the canvas to the content source for one page."""

    def render_page(
        self,
        source: ContentSource,
        canvas: Canvas | None,
        geometry: PrintableRect,
        page_size: PageSize,
        page_index: int,
    ) -> None:
        """
        Draw page ``page_index`` into the canvas's current page.

        PDF space has a bottom-left origin, so the printable rectangle's top
        edge sits at ``page_size.height - geometry.y``.

        Raises:
            DrawError: ``context_unavailable`` if there is no canvas or the
                canvas runs out of resources mid-draw
        """
        if canvas is None:
            raise DrawError(
                f"No graphics context for page {page_index}",
                details={"page_index": page_index},
            )

        offset = geometry.offset_for(page_index)
        top = page_size.height - geometry.y

        try:
            canvas.saveState()
        except (MemoryError, OSError) as e:
            raise DrawError(
                f"Graphics context unavailable for page {page_index}: {e}",
                details={"page_index": page_index},
            ) from e

        try:
            clip = canvas.beginPath()
            clip.rect(geometry.x, top - geometry.height, geometry.width, geometry.height)
            canvas.clipPath(clip, stroke=0, fill=0)

            # Content depth `offset` lands on the printable rect's top edge
            canvas.translate(geometry.x, top + offset)

            source.draw_page(canvas, geometry, page_index, offset)
        except (MemoryError, OSError) as e:
            raise DrawError(
                f"Failed to draw page {page_index}: {e}",
                details={"page_index": page_index},
            ) from e
        finally:
            canvas.restoreState()

        logger.debug(f"Drew page {page_index} at content offset {offset}")
