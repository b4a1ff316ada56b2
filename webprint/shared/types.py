"""Shared types."""

from dataclasses import dataclass


@dataclass
class RequestContext:
    """Per-request metadata propagated to logs."""

    request_id: str
    actor: str = "system"
    work_item_id: str | None = None
    context_id: str | None = None
