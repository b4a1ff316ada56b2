"""
PDF assembler - drives a RenderJob from request to finished document.

State machine:

    created -> geometry_resolved -> awaiting_layout -> rendering -> assembled
        any non-terminal state -> failed

The only await is the readiness gate. Once rendering starts, pages are drawn
0..N-1 on a single ReportLab canvas without yielding to the event loop.
"""

import asyncio
import io

from reportlab.pdfgen.canvas import Canvas

from webprint.shared.errors import (
    DrawError,
    JobStateError,
    RenderCancelledError,
    WebPrintError,
)
from webprint.shared.logging import get_logger

from .geometry import resolve
from .job import RenderJob, RenderState
from .readiness import LayoutReadinessGate
from .renderer import PageRenderer

logger = get_logger(__name__)

PDF_CREATOR = "WebPrint"


class PdfAssembler:
    """Runs render jobs through geometry, layout and page rendering."""

    def __init__(
        self,
        gate: LayoutReadinessGate | None = None,
        renderer: PageRenderer | None = None,
    ):
        self.gate = gate or LayoutReadinessGate()
        self.renderer = renderer or PageRenderer()

    async def run(self, job: RenderJob) -> RenderJob:
        """
        Drive ``job`` to a terminal state.

        Never raises for pipeline failures: they are recorded on the job as
        ``job.error`` with ``job.state == RenderState.FAILED``.
        Cancellation also fails the job, then propagates.

        Raises:
            JobStateError: if ``job`` has already been run
        """
        if job.state is not RenderState.CREATED:
            raise JobStateError(
                f"Job {job.job_id} was already started (state={job.state.value})",
                details={"job_id": job.job_id, "state": job.state.value},
            )

        try:
            # Geometry is checked before the first await
            job.geometry = resolve(job.page_size, job.margins)
            self._transition(job, RenderState.GEOMETRY_RESOLVED)

            self._transition(job, RenderState.AWAITING_LAYOUT)
            job.page_count = await self.gate.wait(job.content_source, job.geometry)

            self._transition(job, RenderState.RENDERING)
            job.result_bytes = self.assemble(job)
            self._transition(job, RenderState.ASSEMBLED)

        except WebPrintError as e:
            logger.warning(f"Render job {job.job_id} failed in {job.state.value}: {e.code}")
            job.fail(e)

        except asyncio.CancelledError:
            logger.warning(f"Render job {job.job_id} cancelled in {job.state.value}")
            if not job.is_terminal:
                job.fail(RenderCancelledError(f"Render job {job.job_id} was cancelled"))
            raise

        except Exception as e:
            logger.exception(f"Render job {job.job_id} failed unexpectedly")
            job.fail(WebPrintError(f"Unexpected render failure: {e}"))

        return job

    def assemble(self, job: RenderJob) -> bytes:
        """
        Draw every page of ``job`` into a fresh PDF and return its bytes.

        The job must be in ``rendering`` with geometry and page count set.
        Any DrawError propagates and the buffer is dropped with it.
        """
        buffer = io.BytesIO()
        pagesize = (job.page_size.width, job.page_size.height)

        try:
            pdf = Canvas(buffer, pagesize=pagesize)
        except (MemoryError, OSError) as e:
            raise DrawError(f"Could not open PDF document: {e}") from e

        pdf.setCreator(PDF_CREATOR)
        if job.title:
            pdf.setTitle(job.title)

        for page_index in range(job.page_count):
            self.renderer.render_page(
                job.content_source, pdf, job.geometry, job.page_size, page_index
            )
            pdf.showPage()

        pdf.save()
        pdf_bytes = buffer.getvalue()

        logger.info(
            f"Assembled PDF for job {job.job_id}: {job.page_count} page(s), "
            f"{len(pdf_bytes)} bytes"
        )
        return pdf_bytes

    @staticmethod
    def _transition(job: RenderJob, new_state: RenderState) -> None:
        logger.debug(f"Job {job.job_id}: {job.state.value} -> {new_state.value}")
        job.advance(new_state)
