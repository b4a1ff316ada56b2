"""
Playwright web view content source.

Lays a Chromium page out at the printable width (1 CSS px = 1 pt), measures the
rendered document height and captures a full-page raster on every layout pass.
Drawing a page crops that raster to the page's slice.
"""

import io
import math

from PIL import Image
from playwright.async_api import Page
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from webprint.config import get_settings
from webprint.modules.render.geometry import pages_for_height
from webprint.modules.render.schemas import PrintableRect
from webprint.shared.logging import get_logger

from .base import ContentSource

logger = get_logger(__name__)


# Returns 0 for a document with nothing visible in it
MEASURE_CONTENT_HEIGHT = """
() => {
    const body = document.body;
    if (!body) {
        return 0;
    }
    const media = body.querySelector('img, svg, canvas, video, iframe, object, embed');
    if (!media && body.innerText.trim() === '') {
        return 0;
    }
    const root = document.documentElement;
    return Math.max(
        root.scrollHeight,
        body.scrollHeight,
        root.getBoundingClientRect().height
    );
}
"""


class WebViewContentSource(ContentSource):
    """Content source backed by a Playwright page."""

    def __init__(self, page: Page):
        super().__init__()
        self._page = page
        self._raster: Image.Image | None = None
        self._raster_width_pt = 0.0
        self.content_height = 0.0
        page.on("close", lambda _page: self.invalidate())

    @property
    def is_valid(self) -> bool:
        return super().is_valid and not self._page.is_closed()

    async def layout(self, geometry: PrintableRect) -> int:
        viewport = {
            "width": max(1, math.ceil(geometry.width)),
            "height": max(1, math.ceil(geometry.height)),
        }
        if self._page.viewport_size != viewport:
            await self._page.set_viewport_size(viewport)

        height = await self._page.evaluate(MEASURE_CONTENT_HEIGHT)
        self.content_height = float(height or 0)

        if self.content_height <= 0:
            self._raster = None
            return 0

        png = await self._page.screenshot(full_page=True, type="png")
        raster = Image.open(io.BytesIO(png))
        raster.load()
        self._raster = raster
        self._raster_width_pt = float(viewport["width"])

        return pages_for_height(self.content_height, geometry)

    def draw_page(
        self,
        canvas: Canvas,
        geometry: PrintableRect,
        page_index: int,
        offset: float,
    ) -> None:
        if self._raster is None:
            return

        # Raster pixels per content point (device scale factor)
        scale = self._raster.width / self._raster_width_pt
        top = int(round(offset * scale))
        bottom = min(self._raster.height, int(round((offset + geometry.height) * scale)))
        if top >= bottom:
            logger.debug(f"Page {page_index} has no raster rows; leaving it blank")
            return

        page_slice = self._raster.crop((0, top, self._raster.width, bottom))
        slice_height = (bottom - top) / scale

        canvas.drawImage(
            ImageReader(page_slice),
            0,
            -(offset + slice_height),
            width=self._raster_width_pt,
            height=slice_height,
        )


async def open_page(browser, html: str) -> Page:
    """Open a new page in ``browser`` with ``html`` loaded and settled."""
    settings = get_settings()
    page = await browser.new_page(device_scale_factor=settings.raster_scale)
    await page.set_content(html, wait_until="networkidle")
    return page
