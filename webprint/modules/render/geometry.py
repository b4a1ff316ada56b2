"""Page geometry - printable area from page size and margins."""

import math

from webprint.shared.errors import GeometryError

from .schemas import PageMargins, PageSize, PrintableRect


def resolve(page_size: PageSize, margins: PageMargins) -> PrintableRect:
    """
    Compute the printable rectangle for a page.

    Args:
        page_size: Page dimensions in points
        margins: Margins in points

    Returns:
        PrintableRect positioned at (left, top)

    Raises:
        GeometryError: ``degenerate_page`` for a non-positive or non-finite page
            dimension, ``margins_exceed_page`` when margins are negative,
            non-finite or leave no printable area
    """
    dims = (page_size.width, page_size.height)
    if not all(math.isfinite(d) and d > 0 for d in dims):
        raise GeometryError(
            f"Page size must be positive and finite, got {page_size.width}x{page_size.height}",
            code=GeometryError.DEGENERATE_PAGE,
            details={"width": _detail(page_size.width), "height": _detail(page_size.height)},
        )

    edges = {
        "top": margins.top,
        "left": margins.left,
        "bottom": margins.bottom,
        "right": margins.right,
    }
    invalid = [
        name for name, value in edges.items() if not math.isfinite(value) or value < 0
    ]
    edges = {name: _detail(value) for name, value in edges.items()}
    if invalid:
        raise GeometryError(
            f"Margins must be finite and not negative: {', '.join(invalid)}",
            code=GeometryError.MARGINS_EXCEED_PAGE,
            details=edges,
        )

    width = page_size.width - margins.left - margins.right
    height = page_size.height - margins.top - margins.bottom
    if width <= 0 or height <= 0:
        raise GeometryError(
            f"Margins leave no printable area ({width}x{height})",
            code=GeometryError.MARGINS_EXCEED_PAGE,
            details={"printable_width": width, "printable_height": height, **edges},
        )

    return PrintableRect(x=margins.left, y=margins.top, width=width, height=height)


def _detail(value: float) -> float | str:
    # inf and nan have no JSON form
    return value if math.isfinite(value) else str(value)


def pages_for_height(content_height: float, rect: PrintableRect) -> int:
    """Number of printable-height slices needed to cover ``content_height``."""
    if content_height <= 0:
        return 0
    return math.ceil(content_height / rect.height)
