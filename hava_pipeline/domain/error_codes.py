"""Canonical failure classification for pipeline results."""

from __future__ import annotations

from enum import Enum
from typing import Final


class HavaErrorCode(str, Enum):
    """Known failure classes surfaced through `HavaResult.error_code`."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    NOT_FOUND_ERROR = "NOT_FOUND_ERROR"
    UNPROCESSABLE_ERROR = "UNPROCESSABLE_ERROR"
    UNEXPECTED_STATUS_ERROR = "UNEXPECTED_STATUS_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    MISSING_LOCATION_ERROR = "MISSING_LOCATION_ERROR"


HAVA_UNAUTHORIZED_MESSAGE: Final[str] = "Unauthorized returned by the API, is the API token valid?"
