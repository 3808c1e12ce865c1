"""Job-layer orchestrator for source synchronisation."""

from __future__ import annotations

import logging

from hava_pipeline.adapters import HavaAdapterError, HavaApiPort
from hava_pipeline.domain import HAVA_UNAUTHORIZED_MESSAGE, HavaErrorCode, HavaResult

from .interfaces import JobWaiterPort, SyncOrchestratorPort
from .job_waiter import HavaJobWaiter


logger = logging.getLogger(__name__)


class HavaSyncOrchestrator(SyncOrchestratorPort):
    """Trigger a source sync job and wait for it to finish."""

    def __init__(self, job_waiter: JobWaiterPort | None = None):
        self._job_waiter = job_waiter or HavaJobWaiter()

    def job_sync_source(self, source_id: str, api_client: HavaApiPort) -> HavaResult:
        """Synchronise one source through the Hava API.

        Args:
            source_id: Source identifier.
            api_client: Authenticated API client.

        Returns:
            HavaResult: Empty success once the sync job completed, otherwise
            the submit failure or the job waiter failure unchanged.

        Raises:
            RuntimeError: This method reports failures through the result.
        """

        logger.info("Starting sync for source with id '%s'", source_id)

        try:
            response = api_client.adapter_source_sync_post(source_id)
        except HavaAdapterError as error:
            return HavaResult.result_failed(
                f"Sync request to source with ID '{source_id}' failed: {error}",
                HavaErrorCode.TRANSPORT_ERROR,
            )

        if response.status_code == 401:
            return HavaResult.result_failed(HAVA_UNAUTHORIZED_MESSAGE, HavaErrorCode.AUTH_ERROR)
        if response.status_code == 404:
            return HavaResult.result_failed(
                f"Sync request to source with ID '{source_id}' failed because a source with that ID was not found",
                HavaErrorCode.NOT_FOUND_ERROR,
            )
        if response.status_code == 422:
            return HavaResult.result_failed(
                "Sync request failed, invalid ID format",
                HavaErrorCode.UNPROCESSABLE_ERROR,
            )
        if response.status_code != 202:
            return HavaResult.result_failed(
                f"Sync request failed with unexpected http status code: {response.status_code}",
                HavaErrorCode.UNEXPECTED_STATUS_ERROR,
            )

        job_id = response.response_json_field("job_id")
        if not job_id:
            return HavaResult.result_failed(
                f"Sync request to source with ID '{source_id}' was accepted without a job_id",
                HavaErrorCode.UNEXPECTED_STATUS_ERROR,
            )
        logger.info("Triggered sync with job ID: %s", job_id)

        job_result = self._job_waiter.job_wait_for_completion(job_id, api_client)
        if not job_result.success:
            return job_result

        logger.info("Sync completed!")
        return HavaResult.result_ok()
