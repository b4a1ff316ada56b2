"""Render service - web content to paginated PDF."""

import asyncio

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from webprint.config import get_settings
from webprint.shared.errors import BrowserError, WebPrintError
from webprint.shared.logging import get_logger

from .assembler import PdfAssembler
from .completion import CompletionDispatcher
from .geometry import resolve
from .job import CompletionCallback, RenderJob, RenderResult, RenderSuccess
from .schemas import DEFAULT_MARGINS, PAGE_PRESETS, PageMargins, PageSize
from .sources.base import ContentSource
from .sources.webview import WebViewContentSource, open_page

logger = get_logger(__name__)


class RenderService:
    """Service for printing web content sources to PDF."""

    def __init__(self, assembler: PdfAssembler | None = None):
        self.settings = get_settings()
        self.assembler = assembler or PdfAssembler()

    async def render(
        self,
        page_size: PageSize,
        margins: PageMargins,
        content_source: ContentSource,
        completion: CompletionCallback,
        *,
        title: str | None = None,
    ) -> RenderResult:
        """
        Render ``content_source`` to PDF and report through ``completion``.

        ``completion`` is called exactly once, with either a RenderSuccess
        (PDF bytes and page count) or a RenderFailure (error kind). The same
        result is returned for callers that prefer to await it. If the task is
        cancelled, a ``cancelled`` failure is delivered before the
        cancellation propagates.

        Args:
            page_size: Page dimensions in points
            margins: Page margins in points
            content_source: Content to print
            completion: Callback receiving the RenderResult
            title: Optional PDF document title

        Returns:
            The RenderResult that was delivered
        """
        job = RenderJob(
            page_size=page_size,
            margins=margins,
            content_source=content_source,
            title=title,
        )
        dispatcher = CompletionDispatcher(completion)

        logger.info(
            f"Render job {job.job_id}: {page_size.width}x{page_size.height}pt page"
        )
        try:
            await self.assembler.run(job)
        except asyncio.CancelledError:
            # The job is already failed; report it before unwinding
            dispatcher.deliver(job)
            raise
        return dispatcher.deliver(job)

    def submit(
        self,
        page_size: PageSize,
        margins: PageMargins,
        content_source: ContentSource,
        completion: CompletionCallback,
        *,
        title: str | None = None,
    ) -> asyncio.Task:
        """Schedule ``render`` on the running loop and return its task."""
        loop = asyncio.get_running_loop()
        return loop.create_task(
            self.render(page_size, margins, content_source, completion, title=title)
        )

    async def html_to_pdf(
        self,
        html: str,
        page_preset: str | None = None,
        page_size: PageSize | None = None,
        margins: PageMargins | None = None,
        title: str | None = None,
    ) -> RenderSuccess:
        """
        Render HTML content to PDF in a headless Chromium page.

        Args:
            html: HTML content to render
            page_preset: Page size preset (letter, legal, tabloid, tearsheet, a4)
            page_size: Explicit page size; overrides page_preset
            margins: Margins in points (defaults to 0.5in)
            title: Optional PDF document title

        Returns:
            RenderSuccess with PDF bytes and page count

        Raises:
            WebPrintError: on any render failure
            BrowserError: if Chromium cannot launch, load or capture the page
        """
        preset_name = page_preset or self.settings.default_page_preset
        effective_size = page_size or PAGE_PRESETS.get(preset_name, PAGE_PRESETS["letter"])
        effective_margins = margins or DEFAULT_MARGINS

        # Fail fast on bad geometry before starting a browser
        resolve(effective_size, effective_margins)

        logger.info(
            f"Rendering HTML to PDF: {effective_size.width}x{effective_size.height}pt"
        )

        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=self.settings.browser_headless)

                try:
                    page = await open_page(browser, html)
                    source = WebViewContentSource(page)
                    result = await self.render(
                        effective_size,
                        effective_margins,
                        source,
                        lambda _result: None,
                        title=title,
                    )
                finally:
                    await browser.close()
        except PlaywrightError as e:
            logger.warning(f"Browser failed while rendering HTML: {e}")
            raise BrowserError(f"Browser rendering failed: {e}") from e

        if not result.ok:
            raise result.error or WebPrintError(result.message, code=result.error_kind)

        logger.info(f"Generated PDF: {result.page_count} page(s), {len(result.pdf_bytes)} bytes")
        return result
