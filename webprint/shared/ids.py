"""ID generation helpers."""

import uuid


def generate_id(prefix: str) -> str:
    """Generate a prefixed short unique ID, e.g. ``job_3f9c2a1b0d4e``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def generate_request_id() -> str:
    return generate_id("req")


def generate_job_id() -> str:
    return generate_id("job")
