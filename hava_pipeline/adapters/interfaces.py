"""Typed interfaces for adapter-layer responsibilities."""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Any, Mapping, Protocol


@dataclass(frozen=True)
class AdapterHttpResponse:
    """Transport-neutral snapshot of one HTTP response.

    Attributes:
        status_code: HTTP status code.
        body: Fully read response body bytes.
        location: `Location` header value when present.
    """

    status_code: int
    body: bytes = b""
    location: str | None = None

    def response_text(self) -> str:
        """Return the body decoded as UTF-8 text.

        Returns:
            str: Decoded body, undecodable bytes replaced.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return self.body.decode("utf-8", errors="replace")

    def response_json(self) -> Any:
        """Decode the body as JSON.

        Returns:
            Any: Decoded JSON document.

        Raises:
            ValueError: Raised when the body is not valid JSON.
        """

        try:
            return json.loads(self.body)
        except (json.JSONDecodeError, UnicodeDecodeError) as error:
            raise ValueError(f"response body is not valid JSON (status={self.status_code})") from error

    def response_json_field(self, field_name: str) -> str:
        """Return one top-level string field of a JSON object body.

        Args:
            field_name: Object key to read.

        Returns:
            str: Stripped field value, empty when the body is not a JSON object
            or the field is missing.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        try:
            payload = self.response_json()
        except ValueError:
            return ""
        if not isinstance(payload, dict):
            return ""
        return str(payload.get(field_name) or "").strip()


class HavaApiPort(Protocol):
    """Port definition for the vendor endpoints used by the pipeline."""

    def adapter_environment_get(self, environment_id: str) -> AdapterHttpResponse:
        """Fetch environment details including its view list.

        Args:
            environment_id: Environment identifier.

        Returns:
            AdapterHttpResponse: Raw endpoint response.

        Raises:
            ConnectionError: Raised when upstream connection fails.
            TimeoutError: Raised when request exceeds timeout.
        """

    def adapter_job_status_get(self, job_id: str) -> AdapterHttpResponse:
        """Fetch job status without following redirects.

        Args:
            job_id: Job identifier.

        Returns:
            AdapterHttpResponse: Raw endpoint response, 303 responses are returned as-is.

        Raises:
            ConnectionError: Raised when upstream connection fails.
            TimeoutError: Raised when request exceeds timeout.
        """

    def adapter_source_sync_post(self, source_id: str) -> AdapterHttpResponse:
        """Submit a sync job for one source.

        Args:
            source_id: Source identifier.

        Returns:
            AdapterHttpResponse: Raw endpoint response.

        Raises:
            ConnectionError: Raised when upstream connection fails.
            TimeoutError: Raised when request exceeds timeout.
        """

    def adapter_view_export_post(self, view_id: str, export_options: Mapping[str, Any]) -> AdapterHttpResponse:
        """Submit an export job for one view.

        Args:
            view_id: View identifier.
            export_options: JSON request body.

        Returns:
            AdapterHttpResponse: Raw endpoint response.

        Raises:
            ConnectionError: Raised when upstream connection fails.
            TimeoutError: Raised when request exceeds timeout.
        """

    def adapter_download_get(self, url: str) -> AdapterHttpResponse:
        """Download an arbitrary URL without API credentials.

        Args:
            url: Absolute download URL.

        Returns:
            AdapterHttpResponse: Response with the streamed body accumulated in memory.

        Raises:
            ConnectionError: Raised when upstream connection fails.
            TimeoutError: Raised when request exceeds timeout.
        """

    def adapter_close(self) -> None:
        """Release pooled connections held by the client."""


class ImageWriterPort(Protocol):
    """Port definition for persisting exported image bytes."""

    def adapter_write_image(self, image_path: str, payload_bytes: bytes) -> None:
        """Write image bytes to the target path, replacing existing content.

        Args:
            image_path: Destination file path.
            payload_bytes: Image payload.

        Returns:
            None: Writes file as side effect.

        Raises:
            OSError: Raised when the file cannot be written.
        """
