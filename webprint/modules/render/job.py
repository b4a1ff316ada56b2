"""
Render job state and results.

A RenderJob is one end-to-end request to turn a content source into a PDF. It
moves forward through RenderState and ends in exactly one terminal state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Union

from webprint.shared.errors import DuplicateDeliveryError, JobStateError, WebPrintError
from webprint.shared.ids import generate_job_id

from .schemas import PageMargins, PageSize, PrintableRect

if TYPE_CHECKING:
    from .sources.base import ContentSource


class RenderState(str, Enum):
    CREATED = "created"
    GEOMETRY_RESOLVED = "geometry_resolved"
    AWAITING_LAYOUT = "awaiting_layout"
    RENDERING = "rendering"
    ASSEMBLED = "assembled"
    FAILED = "failed"


TERMINAL_STATES = frozenset({RenderState.ASSEMBLED, RenderState.FAILED})

_TRANSITIONS: dict[RenderState, frozenset[RenderState]] = {
    RenderState.CREATED: frozenset({RenderState.GEOMETRY_RESOLVED, RenderState.FAILED}),
    RenderState.GEOMETRY_RESOLVED: frozenset({RenderState.AWAITING_LAYOUT, RenderState.FAILED}),
    RenderState.AWAITING_LAYOUT: frozenset({RenderState.RENDERING, RenderState.FAILED}),
    RenderState.RENDERING: frozenset({RenderState.ASSEMBLED, RenderState.FAILED}),
}


@dataclass
class RenderJob:
    """Unit of work for one render invocation."""

    page_size: PageSize
    margins: PageMargins
    content_source: "ContentSource"
    title: str | None = None
    job_id: str = field(default_factory=generate_job_id)
    state: RenderState = RenderState.CREATED
    geometry: PrintableRect | None = None
    page_count: int | None = None
    result_bytes: bytes | None = None
    error: WebPrintError | None = None
    delivered: bool = False

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def advance(self, new_state: RenderState) -> None:
        """Move to ``new_state``; raises JobStateError on an illegal transition."""
        allowed = _TRANSITIONS.get(self.state, frozenset())
        if new_state not in allowed:
            raise JobStateError(
                f"Job {self.job_id} cannot move from {self.state.value} to {new_state.value}",
                details={"job_id": self.job_id, "from": self.state.value, "to": new_state.value},
            )
        self.state = new_state

    def fail(self, error: WebPrintError) -> None:
        """Terminate the job with ``error``, discarding any partial output."""
        self.advance(RenderState.FAILED)
        self.error = error
        self.result_bytes = None

    def mark_delivered(self) -> None:
        if self.delivered:
            raise DuplicateDeliveryError(
                f"Completion for job {self.job_id} was already delivered",
                details={"job_id": self.job_id},
            )
        self.delivered = True


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True)
class RenderSuccess:
    """Finished PDF."""

    pdf_bytes: bytes
    page_count: int
    job_id: str | None = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class RenderFailure:
    """Failed render; never carries PDF bytes."""

    error_kind: str
    message: str
    page_count: int = 0
    job_id: str | None = None
    error: WebPrintError | None = field(default=None, compare=False, repr=False)

    @property
    def ok(self) -> bool:
        return False

    @property
    def pdf_bytes(self) -> None:
        return None


RenderResult = Union[RenderSuccess, RenderFailure]
CompletionCallback = Callable[[RenderResult], None]
