# This file defines shared schema pieces reused by multiple API endpoints.
# It exists so envelope metadata and error payloads stay consistent.

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class EnvelopeFields(BaseModel):
    request_id: str
    generated_at: datetime


class MessageResponse(EnvelopeFields):
    message: str


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Any | None = None
    request_id: str
    timestamp: datetime
