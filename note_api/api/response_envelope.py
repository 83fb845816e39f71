# This file builds response envelopes for API endpoints in a consistent format.
# It exists so clients always receive request tracing fields next to the payload.
# The helpers return plain dictionaries that Pydantic response models validate at runtime.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


def utc_now() -> datetime:
    """Return timezone-aware UTC timestamp for response generation."""

    return datetime.now(tz=UTC)


def build_envelope(*, request_id: str, **payload: Any) -> dict[str, Any]:
    """Attach request id and generation time to a response payload."""

    return {
        "request_id": request_id,
        "generated_at": utc_now(),
        **payload,
    }
