"""
Base content source interface.
"""

from abc import ABC, abstractmethod

from reportlab.pdfgen.canvas import Canvas

from webprint.modules.render.schemas import PrintableRect


class ContentSource(ABC):
    """
    Abstract provider of renderable content.

    The render pipeline only needs three things from a source: whether it is
    still alive, a layout pass that reports the current page count, and a way
    to draw one page's slice into a PDF canvas.
    """

    def __init__(self) -> None:
        self._invalidated = False

    @property
    def is_valid(self) -> bool:
        return not self._invalidated

    def invalidate(self) -> None:
        """Mark the source as released by its owner."""
        self._invalidated = True

    @abstractmethod
    async def layout(self, geometry: PrintableRect) -> int:
        """
        Lay the content out at ``geometry.width`` and report its page count.

        Args:
            geometry: Printable rectangle of one page

        Returns:
            Current page count (0 for empty content)
        """
        pass

    @abstractmethod
    def draw_page(
        self,
        canvas: Canvas,
        geometry: PrintableRect,
        page_index: int,
        offset: float,
    ) -> None:
        """
        Draw one page's slice of the content.

        The canvas is already clipped to the printable rectangle and translated
        so that content-space depth ``d`` maps to ``y = -d``: the slice for
        this page spans ``y`` from ``-offset`` down to
        ``-(offset + geometry.height)``.

        Args:
            canvas: ReportLab canvas for the current PDF page
            geometry: Printable rectangle of one page
            page_index: Zero-based page index
            offset: Content-space depth where this page starts
        """
        pass
