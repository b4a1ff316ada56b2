"""
Layout readiness gate.

Web content lays out asynchronously and its page count can move around while
fonts, images and scripts settle. The gate keeps asking the content source for
a layout pass until the reported count repeats, yielding to the event loop
between passes.
"""

import asyncio

from webprint.config import get_settings
from webprint.shared.errors import ReadinessError
from webprint.shared.logging import get_logger

from .schemas import PrintableRect
from .sources.base import ContentSource

logger = get_logger(__name__)


class LayoutReadinessGate:
    """
    Wait for a content source to report a stable page count.

    A count is stable once ``stable_observations`` consecutive layout passes
    report the same value. Observation stops after ``max_observations`` passes
    or ``timeout`` seconds, whichever comes first.
    """

    def __init__(
        self,
        *,
        poll_interval: float | None = None,
        stable_observations: int | None = None,
        max_observations: int | None = None,
        timeout: float | None = None,
    ):
        settings = get_settings()
        self.poll_interval = (
            poll_interval if poll_interval is not None else settings.layout_poll_interval
        )
        self.stable_observations = (
            stable_observations
            if stable_observations is not None
            else settings.layout_stable_observations
        )
        self.max_observations = (
            max_observations if max_observations is not None else settings.layout_max_observations
        )
        self.timeout = timeout if timeout is not None else settings.layout_timeout

        if self.stable_observations < 2:
            raise ValueError("stable_observations must be at least 2")
        if self.max_observations < self.stable_observations:
            raise ValueError("max_observations must be >= stable_observations")

    async def wait(self, source: ContentSource, geometry: PrintableRect) -> int:
        """
        Observe ``source`` until its page count is final.

        Returns:
            The stable, non-zero page count

        Raises:
            ReadinessError: ``source_invalidated`` if the source goes away,
                ``empty_content`` if it settles on zero pages,
                ``layout_timeout`` if the budget runs out first
        """
        loop = asyncio.get_running_loop()
        task = asyncio.current_task()
        deadline = loop.time() + self.timeout
        last_count: int | None = None
        run_length = 0

        for observation in range(1, self.max_observations + 1):
            self._ensure_valid(source, observation)

            remaining = deadline - loop.time()
            if remaining <= 0:
                break

            try:
                async with asyncio.timeout(remaining):
                    count = await source.layout(geometry)
            except TimeoutError:
                self._ensure_not_cancelled(task)
                break
            except Exception:
                # A source torn down mid-pass usually fails its own call
                self._ensure_valid(source, observation)
                raise

            self._ensure_not_cancelled(task)

            self._ensure_valid(source, observation)
            count = max(int(count), 0)

            if count == last_count:
                run_length += 1
            else:
                last_count = count
                run_length = 1

            logger.debug(
                f"Layout observation {observation}: {count} page(s), "
                f"stable for {run_length}/{self.stable_observations}"
            )

            if run_length >= self.stable_observations:
                if count == 0:
                    raise ReadinessError(
                        "Content laid out to zero pages",
                        code=ReadinessError.EMPTY_CONTENT,
                        details={"observations": observation},
                    )
                return count

            if observation == self.max_observations:
                break
            if loop.time() + self.poll_interval >= deadline:
                break
            await asyncio.sleep(self.poll_interval)

        raise ReadinessError(
            "Content layout did not stabilize in time",
            code=ReadinessError.LAYOUT_TIMEOUT,
            details={
                "last_page_count": last_count,
                "max_observations": self.max_observations,
                "timeout": self.timeout,
            },
        )

    @staticmethod
    def _ensure_not_cancelled(task: asyncio.Task | None) -> None:
        # A cancel that lands as a pass completes can be absorbed on 3.11
        if task is not None and task.cancelling():
            raise asyncio.CancelledError

    @staticmethod
    def _ensure_valid(source: ContentSource, observation: int) -> None:
        if not source.is_valid:
            raise ReadinessError(
                "Content source was invalidated before layout settled",
                code=ReadinessError.SOURCE_INVALIDATED,
                details={"observation": observation},
            )
