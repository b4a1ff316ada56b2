"""Completion dispatch - the single hand-off of a finished job to its caller."""

from webprint.shared.errors import JobStateError
from webprint.shared.logging import get_logger

from .job import (
    CompletionCallback,
    RenderFailure,
    RenderJob,
    RenderResult,
    RenderState,
    RenderSuccess,
)

logger = get_logger(__name__)


class CompletionDispatcher:
    """Invoke a completion callback exactly once per job."""

    def __init__(self, completion: CompletionCallback):
        self._completion = completion

    def deliver(self, job: RenderJob) -> RenderResult:
        """
        Hand the result of a terminal job to the callback.

        Returns:
            The RenderResult passed to the callback

        Raises:
            JobStateError: if the job has not reached a terminal state
            DuplicateDeliveryError: if the job was already delivered
        """
        if not job.is_terminal:
            raise JobStateError(
                f"Job {job.job_id} is not finished (state={job.state.value})",
                details={"job_id": job.job_id, "state": job.state.value},
            )

        job.mark_delivered()
        result = self.to_result(job)

        try:
            self._completion(result)
        except Exception:
            logger.exception(f"Completion callback for job {job.job_id} raised")
            raise

        return result

    @staticmethod
    def to_result(job: RenderJob) -> RenderResult:
        if job.state is RenderState.ASSEMBLED:
            return RenderSuccess(
                pdf_bytes=job.result_bytes,
                page_count=job.page_count,
                job_id=job.job_id,
            )

        error = job.error
        return RenderFailure(
            error_kind=error.code if error else "internal_error",
            message=error.message if error else "Render failed",
            page_count=job.page_count or 0,
            job_id=job.job_id,
            error=error,
        )
