"""Job-layer orchestrator for PNG export of environment views."""

from __future__ import annotations

import logging
from typing import Any, Final, Mapping

from hava_pipeline.adapters import FileSystemImageWriter, HavaAdapterError, HavaApiPort, ImageWriterPort
from hava_pipeline.domain import HAVA_UNAUTHORIZED_MESSAGE, HavaErrorCode, HavaResult

from .input_validation import job_validate_view_type
from .interfaces import ExportOrchestratorPort, JobWaiterPort, ViewResolverPort
from .job_waiter import HavaJobWaiter
from .view_resolver import HavaViewResolver


logger = logging.getLogger(__name__)

EXPORT_REQUEST_BODY: Final[Mapping[str, Any]] = {
    "export_format": "png",
    "connections": True,
    "isometric": False,
    "labels": False,
}


class HavaExportOrchestrator(ExportOrchestratorPort):
    """Drive view lookup, export job submission, job wait and image download.

    Each stage short-circuits the rest on failure. The image file is only
    touched after the download succeeded.
    """

    def __init__(
        self,
        job_waiter: JobWaiterPort | None = None,
        view_resolver: ViewResolverPort | None = None,
        image_writer: ImageWriterPort | None = None,
    ):
        """Initialize export orchestrator dependencies.

        Args:
            job_waiter: Waiter used for the export job.
            view_resolver: Resolver locating the view to export.
            image_writer: Writer persisting the downloaded PNG.

        Returns:
            None: Initializer does not return a value.

        Raises:
            RuntimeError: This initializer does not raise runtime errors.
        """

        self._job_waiter = job_waiter or HavaJobWaiter()
        self._view_resolver = view_resolver or HavaViewResolver()
        self._image_writer = image_writer or FileSystemImageWriter()

    def job_export_view(
        self,
        environment_id: str,
        view_type: str,
        api_client: HavaApiPort,
        image_path: str,
    ) -> HavaResult:
        """Export one environment view as PNG and write it to `image_path`.

        Args:
            environment_id: Environment identifier.
            view_type: Logical view type key.
            api_client: Authenticated API client.
            image_path: Output file path, parent folders are created.

        Returns:
            HavaResult: Success carrying the download location, or the first
            stage failure.

        Raises:
            RuntimeError: This method reports failures through the result.
        """

        logger.info("Starting export")

        view_type_result = job_validate_view_type(view_type)
        if not view_type_result.success:
            return view_type_result

        view_id_result = self._view_resolver.view_resolve_id(environment_id, view_type, api_client)
        if not view_id_result.success:
            return view_id_result
        logger.info("View found: %s", view_id_result.message)

        export_result = self._export_submit_and_wait(view_id_result.message, api_client)
        if not export_result.success:
            logger.error(export_result.message)
            return export_result
        logger.info("PNG exported to: %s", export_result.message)

        download_result = self._export_download_image(export_result.message, api_client, image_path)
        if not download_result.success:
            return download_result

        return export_result

    def _export_submit_and_wait(self, view_id: str, api_client: HavaApiPort) -> HavaResult:
        """Submit the export job for one view and wait for it to complete.

        Args:
            view_id: View identifier.
            api_client: Authenticated API client.

        Returns:
            HavaResult: Job waiter result, expected to carry the download location.

        Raises:
            RuntimeError: This helper reports failures through the result.
        """

        try:
            response = api_client.adapter_view_export_post(view_id, EXPORT_REQUEST_BODY)
        except HavaAdapterError as error:
            return HavaResult.result_failed(
                f"Export request for view '{view_id}' failed: {error}",
                HavaErrorCode.TRANSPORT_ERROR,
            )

        if response.status_code == 401:
            return HavaResult.result_failed(HAVA_UNAUTHORIZED_MESSAGE, HavaErrorCode.AUTH_ERROR)
        if response.status_code == 404:
            return HavaResult.result_failed(
                f"Could not find view with ID '{view_id}'. This should never happen!",
                HavaErrorCode.NOT_FOUND_ERROR,
            )
        if response.status_code == 422:
            api_message = response.response_json_field("message") or response.response_text()
            return HavaResult.result_failed(
                f"API responded with invalid request: {api_message}",
                HavaErrorCode.UNPROCESSABLE_ERROR,
            )
        if response.status_code != 202:
            return HavaResult.result_failed(
                f"Unexpected status code returned from Hava API: '{response.status_code}' "
                f"Error from API: {response.response_text()}",
                HavaErrorCode.UNEXPECTED_STATUS_ERROR,
            )

        job_id = response.response_json_field("job_id")
        if not job_id:
            return HavaResult.result_failed(
                f"Export request for view '{view_id}' was accepted without a job_id",
                HavaErrorCode.UNEXPECTED_STATUS_ERROR,
            )
        logger.info("Triggered export with job ID: %s", job_id)

        return self._job_waiter.job_wait_for_completion(job_id, api_client)

    def _export_download_image(self, location: str, api_client: HavaApiPort, image_path: str) -> HavaResult:
        """Download the rendered PNG and write it to disk.

        An export job that finished in-band leaves no download location; this
        is reported as its own failure instead of requesting an empty URL.

        Args:
            location: Download location returned by the job waiter.
            api_client: API client providing the credential-free download request.
            image_path: Output file path.

        Returns:
            HavaResult: Success, or failure for missing location, transport
            errors, non-200 status and filesystem errors.

        Raises:
            RuntimeError: This helper reports failures through the result.
        """

        if not location.strip():
            return HavaResult.result_failed(
                "Export job completed without a download location, no image to download",
                HavaErrorCode.MISSING_LOCATION_ERROR,
            )

        try:
            response = api_client.adapter_download_get(location)
        except HavaAdapterError as error:
            return HavaResult.result_failed(
                f"Downloading image failed: {error}",
                HavaErrorCode.TRANSPORT_ERROR,
            )

        if response.status_code != 200:
            return HavaResult.result_failed(
                f"Unexpected status code when downloading png '{response.status_code}'",
                HavaErrorCode.TRANSPORT_ERROR,
            )

        try:
            self._image_writer.adapter_write_image(image_path, response.body)
        except OSError as error:
            return HavaResult.result_failed(
                f"Writing image to '{image_path}' failed: {error}",
                HavaErrorCode.TRANSPORT_ERROR,
            )

        logger.info("Image written to %s (%d bytes)", image_path, len(response.body))
        return HavaResult.result_ok(image_path)
