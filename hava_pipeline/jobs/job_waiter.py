"""Polling waiter for asynchronous Hava jobs."""

from __future__ import annotations

import logging
import time
from typing import Callable, Final

from hava_pipeline.adapters import HavaAdapterError, HavaApiPort
from hava_pipeline.domain import HAVA_UNAUTHORIZED_MESSAGE, HavaErrorCode, HavaResult

from .interfaces import JobWaiterPort


logger = logging.getLogger(__name__)


class HavaJobWaiter(JobWaiterPort):
    """Poll the job status endpoint at a fixed cadence until the job is done.

    The vendor reports completion either in-band (HTTP 200 with a state other
    than `queued`/`active`) or out-of-band (HTTP 303 pointing at the result).
    Both are successful exits; only the redirect carries a payload.
    """

    _PENDING_STATES: Final[frozenset[str]] = frozenset({"queued", "active"})

    def __init__(
        self,
        timeout_seconds: float = 360.0,
        poll_interval_seconds: float = 1.0,
        clock_provider: Callable[[], float] | None = None,
        sleep_provider: Callable[[float], None] | None = None,
    ):
        """Initialize job waiter.

        Args:
            timeout_seconds: Wall-clock budget measured from loop entry.
            poll_interval_seconds: Fixed delay between status checks.
            clock_provider: Optional monotonic clock returning seconds.
            sleep_provider: Optional sleep function accepting seconds.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when timing values are invalid.
        """

        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        if poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be > 0")

        self._timeout_seconds = float(timeout_seconds)
        self._poll_interval_seconds = float(poll_interval_seconds)
        self._clock_provider = clock_provider or time.monotonic
        self._sleep_provider = sleep_provider or time.sleep

    def job_wait_for_completion(self, job_id: str, api_client: HavaApiPort) -> HavaResult:
        """Poll one job until terminal state, completion redirect or timeout.

        Args:
            job_id: Vendor job identifier.
            api_client: Authenticated API client that does not follow redirects.

        Returns:
            HavaResult: Success with the redirect location (empty for in-band
            completion), or a failure for 401, unexpected status codes,
            transport errors and timeout.

        Raises:
            RuntimeError: This method reports failures through the result.
        """

        wait_start = self._clock_provider()
        logger.info("Waiting for job '%s' to complete", job_id)
        logger.info("Timeout set to %s seconds", self._timeout_seconds)

        while True:
            if self._clock_provider() - wait_start >= self._timeout_seconds:
                return HavaResult.result_failed(
                    f"Timed out waiting for job '{job_id}' to finish",
                    HavaErrorCode.TIMEOUT_ERROR,
                )

            try:
                response = api_client.adapter_job_status_get(job_id)
            except HavaAdapterError as error:
                return HavaResult.result_failed(
                    f"Request failed while waiting for job '{job_id}': {error}",
                    HavaErrorCode.TRANSPORT_ERROR,
                )

            if response.status_code == 401:
                return HavaResult.result_failed(HAVA_UNAUTHORIZED_MESSAGE, HavaErrorCode.AUTH_ERROR)

            if response.status_code == 200:
                try:
                    body = response.response_json()
                except ValueError:
                    return HavaResult.result_failed(
                        f"Job status response for job '{job_id}' is not valid JSON",
                        HavaErrorCode.UNEXPECTED_STATUS_ERROR,
                    )
                state = body.get("state") if isinstance(body, dict) else None
                if not (isinstance(state, str) and state in self._PENDING_STATES):
                    logger.info("Job '%s' finished with state '%s'", job_id, state)
                    return HavaResult.result_ok()
                logger.debug("Job '%s' still %s", job_id, state)
            elif response.status_code == 303:
                logger.info("Job '%s' completed with redirect", job_id)
                return HavaResult.result_ok(response.location or "")
            else:
                return HavaResult.result_failed(
                    f"Unexpected http error code {response.status_code} while waiting for job '{job_id}' to complete",
                    HavaErrorCode.UNEXPECTED_STATUS_ERROR,
                )

            self._sleep_provider(self._poll_interval_seconds)
