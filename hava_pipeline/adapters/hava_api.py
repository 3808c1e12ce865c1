"""Hava REST API adapter implementation backed by httpx."""

from __future__ import annotations

import logging
from typing import Any, Final, Mapping

import httpx

from .hava_errors import HavaRequestTimeoutError, HavaTransportError
from .interfaces import AdapterHttpResponse, HavaApiPort


logger = logging.getLogger(__name__)


class HavaApiClient(HavaApiPort):
    """Adapter implementation for the environment, job, sync, export and download endpoints.

    One instance owns one authenticated `httpx.Client`. Redirects are never
    followed on the authenticated client so job completion redirects stay
    observable to callers.
    """

    _USER_AGENT: Final[str] = "hava-pipeline/1.0 (Python/httpx)"
    DEFAULT_BASE_URL: Final[str] = "https://api.hava.io"

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        request_timeout_seconds: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize Hava API adapter.

        Args:
            token: Hava API token sent as bearer credential.
            base_url: Base endpoint URL for the Hava API.
            request_timeout_seconds: Per-request HTTP timeout in seconds.
            transport: Optional httpx transport override, used by tests.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_token = token.strip()
        normalized_base_url = base_url.strip()

        if not normalized_token:
            raise ValueError("token must not be blank")
        if not normalized_base_url:
            raise ValueError("base_url must not be blank")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._base_url = normalized_base_url.rstrip("/")
        self._timeout = httpx.Timeout(request_timeout_seconds)
        self._transport = transport
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=self._timeout,
            follow_redirects=False,
            transport=transport,
            headers={
                "Authorization": f"Bearer {normalized_token}",
                "Accept": "application/json",
                "User-Agent": self._USER_AGENT,
            },
        )

    def __enter__(self) -> HavaApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.adapter_close()

    def adapter_environment_get(self, environment_id: str) -> AdapterHttpResponse:
        return self._adapter_request("GET", f"/environments/{environment_id}")

    def adapter_job_status_get(self, job_id: str) -> AdapterHttpResponse:
        return self._adapter_request("GET", f"/jobs/{job_id}")

    def adapter_source_sync_post(self, source_id: str) -> AdapterHttpResponse:
        return self._adapter_request("POST", f"/sources/{source_id}/sync", json_body={})

    def adapter_view_export_post(self, view_id: str, export_options: Mapping[str, Any]) -> AdapterHttpResponse:
        return self._adapter_request("POST", f"/views/{view_id}/export", json_body=dict(export_options))

    def adapter_download_get(self, url: str) -> AdapterHttpResponse:
        """Stream one download into memory using a fresh credential-free client.

        Args:
            url: Absolute download URL, typically a pre-signed storage location.

        Returns:
            AdapterHttpResponse: Response with accumulated body bytes.

        Raises:
            HavaTransportError: Raised for network failures, redirect loops or unusable URLs.
            HavaRequestTimeoutError: Raised when the download exceeds the request timeout.
        """

        buffer = bytearray()
        try:
            with httpx.Client(
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
                headers={"User-Agent": self._USER_AGENT},
            ) as download_client:
                with download_client.stream("GET", url) as response:
                    for chunk in response.iter_bytes():
                        buffer.extend(chunk)
                    status_code = response.status_code
                    location = response.headers.get("location")
        except httpx.TimeoutException as error:
            raise HavaRequestTimeoutError("Hava download request timed out", url=url) from error
        except (httpx.HTTPError, httpx.InvalidURL) as error:
            raise HavaTransportError(f"Hava download request failed: {error}", url=url) from error

        logger.debug("Downloaded %d bytes (status=%s)", len(buffer), status_code)
        return AdapterHttpResponse(status_code=status_code, body=bytes(buffer), location=location)

    def adapter_close(self) -> None:
        self._client.close()

    def _adapter_request(
        self,
        method: str,
        path: str,
        json_body: Mapping[str, Any] | None = None,
    ) -> AdapterHttpResponse:
        """Execute one authenticated API request and snapshot the response.

        Args:
            method: HTTP method.
            path: Endpoint path relative to the base URL.
            json_body: Optional JSON request body.

        Returns:
            AdapterHttpResponse: Status, body and `Location` header.

        Raises:
            HavaTransportError: Raised for network-level failures.
            HavaRequestTimeoutError: Raised when the request exceeds the timeout.
        """

        url = f"{self._base_url}{path}"
        try:
            response = self._client.request(method, path, json=json_body)
        except httpx.TimeoutException as error:
            raise HavaRequestTimeoutError(f"Hava API request timed out: {method} {url}", url=url) from error
        except (httpx.HTTPError, httpx.InvalidURL) as error:
            raise HavaTransportError(f"Hava API request failed: {method} {url}: {error}", url=url) from error

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return AdapterHttpResponse(
            status_code=response.status_code,
            body=response.content,
            location=response.headers.get("location"),
        )
