"""
Error hierarchy for WebPrint.

Every failure that can end a render job is a WebPrintError subclass carrying a
stable machine-readable ``code`` and the HTTP status the API surfaces it with.
"""

from typing import Any


class WebPrintError(Exception):
    """Base error for all WebPrint failures."""

    code: str = "internal_error"
    http_status: int = 500

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# =============================================================================
# GEOMETRY
# =============================================================================

class GeometryError(WebPrintError):
    """Invalid page size or margins. Raised before any async work starts."""

    DEGENERATE_PAGE = "degenerate_page"
    MARGINS_EXCEED_PAGE = "margins_exceed_page"

    code = DEGENERATE_PAGE
    http_status = 422


# =============================================================================
# LAYOUT
# =============================================================================

class ReadinessError(WebPrintError):
    """Content layout never produced a usable page count."""

    LAYOUT_TIMEOUT = "layout_timeout"
    EMPTY_CONTENT = "empty_content"
    SOURCE_INVALIDATED = "source_invalidated"

    code = LAYOUT_TIMEOUT
    http_status = 504

    _STATUS_BY_CODE = {
        LAYOUT_TIMEOUT: 504,
        EMPTY_CONTENT: 422,
        SOURCE_INVALIDATED: 409,
    }

    def __init__(self, message: str, *, code: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, code=code, details=details)
        self.http_status = self._STATUS_BY_CODE.get(code, 504)


# =============================================================================
# DRAWING
# =============================================================================

class DrawError(WebPrintError):
    """The PDF graphics context could not be used for a page."""

    CONTEXT_UNAVAILABLE = "context_unavailable"

    code = CONTEXT_UNAVAILABLE
    http_status = 500


# =============================================================================
# PROGRAMMING ERRORS
# =============================================================================

class JobStateError(WebPrintError):
    """Illegal state transition on a render job."""

    code = "invalid_job_state"
    http_status = 500


class DuplicateDeliveryError(JobStateError):
    """A render job's completion was delivered more than once."""

    code = "duplicate_delivery"


# =============================================================================
# JOB LIFECYCLE
# =============================================================================

class RenderCancelledError(WebPrintError):
    """The task running a render job was cancelled before it finished."""

    code = "cancelled"
    http_status = 503


# =============================================================================
# BROWSER
# =============================================================================

class BrowserError(WebPrintError):
    """Headless browser could not load or capture the content."""

    code = "browser_error"
    http_status = 502
