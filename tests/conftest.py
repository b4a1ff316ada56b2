"""Shared fixtures for WebPrint tests."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from webprint.app import build_app
from webprint.config import Settings, init_settings, reset_settings
from webprint.modules.render.geometry import pages_for_height
from webprint.modules.render.sources.base import ContentSource


class FakeContentSource(ContentSource):
    """
    In-memory content source of a given height.

    Reports ``settle_after`` distinct, still-changing page counts before
    settling on the real one, and records every page it is asked to draw.
    """

    def __init__(
        self,
        content_height: float,
        *,
        settle_after: int = 0,
        invalidate_after: int | None = None,
        fail_on_page: int | None = None,
        failure: type[BaseException] = MemoryError,
    ):
        super().__init__()
        self.content_height = content_height
        self.settle_after = settle_after
        self.invalidate_after = invalidate_after
        self.fail_on_page = fail_on_page
        self.failure = failure
        self.layout_calls = 0
        self.drawn: list[tuple[int, float]] = []

    async def layout(self, geometry) -> int:
        self.layout_calls += 1
        if self.invalidate_after is not None and self.layout_calls >= self.invalidate_after:
            self.invalidate()
        if self.layout_calls <= self.settle_after:
            return 1000 + self.layout_calls
        return pages_for_height(self.content_height, geometry)

    def draw_page(self, canvas, geometry, page_index, offset) -> None:
        self.drawn.append((page_index, offset))
        if page_index == self.fail_on_page:
            raise self.failure(f"cannot draw page {page_index}")

        canvas.setFillColorRGB(0.92, 0.92, 0.92)
        canvas.rect(0, -(offset + geometry.height), geometry.width, geometry.height, fill=1, stroke=0)
        canvas.setFillColorRGB(0, 0, 0)
        canvas.drawString(12, -(offset + 24), f"Page {page_index + 1}")


@pytest.fixture
def fake_source():
    """Factory for FakeContentSource instances."""
    return FakeContentSource


@pytest.fixture
def settings() -> Generator[Settings, None, None]:
    """Settings with a fast readiness loop."""
    test_settings = Settings(
        layout_poll_interval=0.001,
        layout_stable_observations=2,
        layout_max_observations=20,
        layout_timeout=2.0,
        log_level="DEBUG",
    )
    init_settings(test_settings)
    yield test_settings
    reset_settings()


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """Test client over a fully built app."""
    app = build_app(settings)
    with TestClient(app) as c:
        yield c
