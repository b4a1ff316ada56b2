"""Tests for the PDF assembler state machine."""

import asyncio
import io

import pytest
from pypdf import PdfReader

from webprint.modules.render.assembler import PdfAssembler
from webprint.modules.render.job import RenderJob, RenderState
from webprint.modules.render.schemas import PageMargins, PageSize
from webprint.shared.errors import (
    DrawError,
    GeometryError,
    JobStateError,
    ReadinessError,
    RenderCancelledError,
    WebPrintError,
)

LETTER = PageSize(width=612, height=792)
HALF_INCH = PageMargins.uniform(36)


def make_job(source, *, page_size=LETTER, margins=HALF_INCH, title=None) -> RenderJob:
    return RenderJob(page_size=page_size, margins=margins, content_source=source, title=title)


class TestPdfAssembler:
    """Job transitions and document output."""

    def test_assembles_one_pdf_page_per_content_page(self, settings, fake_source) -> None:
        source = fake_source(2160)
        job = asyncio.run(PdfAssembler().run(make_job(source)))

        assert job.state is RenderState.ASSEMBLED
        assert job.page_count == 3
        assert job.error is None

        reader = PdfReader(io.BytesIO(job.result_bytes))
        assert len(reader.pages) == 3
        for page in reader.pages:
            assert float(page.mediabox.width) == 612
            assert float(page.mediabox.height) == 792

    def test_pages_drawn_once_in_order(self, settings, fake_source) -> None:
        source = fake_source(3000)
        asyncio.run(PdfAssembler().run(make_job(source)))

        assert source.drawn == [(0, 0), (1, 720), (2, 1440), (3, 2160), (4, 2880)]

    def test_title_written_to_metadata(self, settings, fake_source) -> None:
        job = asyncio.run(PdfAssembler().run(make_job(fake_source(100), title="Quarterly")))

        reader = PdfReader(io.BytesIO(job.result_bytes))
        assert reader.metadata.title == "Quarterly"
        assert reader.metadata.creator == "WebPrint"

    def test_geometry_failure_skips_layout(self, settings, fake_source) -> None:
        source = fake_source(2160)
        job = make_job(source, margins=PageMargins(left=300, right=312))

        asyncio.run(PdfAssembler().run(job))

        assert job.state is RenderState.FAILED
        assert isinstance(job.error, GeometryError)
        assert job.error.code == GeometryError.MARGINS_EXCEED_PAGE
        assert job.geometry is None
        assert source.layout_calls == 0

    def test_readiness_failure(self, settings, fake_source) -> None:
        source = fake_source(0)
        job = asyncio.run(PdfAssembler().run(make_job(source)))

        assert job.state is RenderState.FAILED
        assert isinstance(job.error, ReadinessError)
        assert job.error.code == ReadinessError.EMPTY_CONTENT
        assert job.result_bytes is None
        assert source.drawn == []

    def test_draw_failure_discards_partial_output(self, settings, fake_source) -> None:
        source = fake_source(2160, fail_on_page=1)
        job = asyncio.run(PdfAssembler().run(make_job(source)))

        assert job.state is RenderState.FAILED
        assert isinstance(job.error, DrawError)
        assert job.result_bytes is None
        assert job.page_count == 3
        # aborted at page 1, page 2 never attempted
        assert [index for index, _ in source.drawn] == [0, 1]

    def test_unexpected_error_still_fails_job(self, settings, fake_source) -> None:
        source = fake_source(2160, fail_on_page=0, failure=ZeroDivisionError)
        job = asyncio.run(PdfAssembler().run(make_job(source)))

        assert job.state is RenderState.FAILED
        assert type(job.error) is WebPrintError
        assert job.error.code == "internal_error"

    def test_cancellation_fails_job_and_propagates(self, settings, fake_source) -> None:
        source = fake_source(2160, settle_after=1000)
        job = make_job(source)

        async def main():
            task = asyncio.create_task(PdfAssembler().run(job))
            while source.layout_calls < 2:
                await asyncio.sleep(0)
            task.cancel()
            await task

        with pytest.raises(asyncio.CancelledError):
            asyncio.run(main())

        assert job.state is RenderState.FAILED
        assert isinstance(job.error, RenderCancelledError)
        assert job.error.code == "cancelled"
        assert job.result_bytes is None

    def test_job_cannot_be_rerun(self, settings, fake_source) -> None:
        job = asyncio.run(PdfAssembler().run(make_job(fake_source(100))))

        with pytest.raises(JobStateError):
            asyncio.run(PdfAssembler().run(job))

        assert job.state is RenderState.ASSEMBLED


class TestRenderJob:
    """State machine rules on the job itself."""

    def test_illegal_transition(self, fake_source) -> None:
        job = make_job(fake_source(100))

        with pytest.raises(JobStateError):
            job.advance(RenderState.RENDERING)

        assert job.state is RenderState.CREATED

    def test_terminal_state_is_final(self, fake_source) -> None:
        job = make_job(fake_source(100))
        job.fail(DrawError("boom"))

        assert job.is_terminal
        with pytest.raises(JobStateError):
            job.advance(RenderState.GEOMETRY_RESOLVED)
        with pytest.raises(JobStateError):
            job.fail(DrawError("again"))

    def test_job_ids_are_unique(self, fake_source) -> None:
        ids = {make_job(fake_source(100)).job_id for _ in range(50)}

        assert len(ids) == 50
        assert all(job_id.startswith("job_") for job_id in ids)
