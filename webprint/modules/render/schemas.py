"""Render module schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# GEOMETRY
# =============================================================================

class PageSize(BaseModel):
    """Page dimensions in points (1/72 inch)."""

    width: float = Field(..., description="Page width in points")
    height: float = Field(..., description="Page height in points")


class PageMargins(BaseModel):
    """Page margins in points."""

    top: float = 0.0
    left: float = 0.0
    bottom: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "PageMargins":
        return cls(top=value, left=value, bottom=value, right=value)


class PrintableRect(BaseModel):
    """
    Area of a page left for content once margins are removed.

    Coordinates use a top-left origin, matching how web content is laid out.
    """

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float

    def offset_for(self, page_index: int) -> float:
        """Content-space vertical offset where ``page_index`` starts."""
        return page_index * self.height


# =============================================================================
# PRESETS
# =============================================================================

PagePreset = Literal["letter", "legal", "tabloid", "tearsheet", "a4"]

# Dimensions in points
PAGE_PRESETS: dict[str, PageSize] = {
    "letter": PageSize(width=612, height=792),
    "legal": PageSize(width=612, height=1008),
    "tabloid": PageSize(width=792, height=1224),
    "tearsheet": PageSize(width=1224, height=792),
    "a4": PageSize(width=595.28, height=841.89),
}

# 0.5in on every side
DEFAULT_MARGINS = PageMargins.uniform(36)


class PagePresetInfo(BaseModel):
    """A named page size."""

    name: str
    width: float
    height: float


# =============================================================================
# REQUESTS / RESPONSES
# =============================================================================

class RenderPdfRequest(BaseModel):
    """Request to render HTML to PDF."""

    html: str = Field(..., description="HTML content to render")
    page_preset: PagePreset = Field(
        default="letter",
        description="Page preset: letter, legal, tabloid, tearsheet, a4"
    )
    page_size: PageSize | None = Field(
        default=None,
        description="Explicit page size in points; overrides page_preset"
    )
    margins: PageMargins | None = Field(
        default=None,
        description="Margins in points (defaults to 36pt on every side)"
    )
    title: str | None = Field(default=None, description="PDF document title")
