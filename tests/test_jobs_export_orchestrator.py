"""Regression tests for view export orchestration and image persistence."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from hava_pipeline.adapters import AdapterHttpResponse, FileSystemImageWriter, HavaApiClient, HavaTransportError
from hava_pipeline.domain import HavaErrorCode, HavaResult
from hava_pipeline.jobs import EXPORT_REQUEST_BODY, HavaExportOrchestrator


_PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


class _ExportApiStub:
    """API stub for export submission and download calls."""

    def __init__(
        self,
        export_response: AdapterHttpResponse,
        download_response: AdapterHttpResponse | Exception | None = None,
    ):
        self._export_response = export_response
        self._download_response = download_response or AdapterHttpResponse(status_code=200, body=_PNG_BYTES)
        self.export_calls: list[tuple[str, dict[str, object]]] = []
        self.download_urls: list[str] = []

    def adapter_view_export_post(self, view_id: str, export_options) -> AdapterHttpResponse:
        self.export_calls.append((view_id, dict(export_options)))
        return self._export_response

    def adapter_download_get(self, url: str) -> AdapterHttpResponse:
        self.download_urls.append(url)
        if isinstance(self._download_response, Exception):
            raise self._download_response
        return self._download_response


class _ViewResolverStub:
    """View resolver stub returning a fixed result."""

    def __init__(self, result: HavaResult):
        self._result = result
        self.calls: list[tuple[str, str]] = []

    def view_resolve_id(self, environment_id: str, view_type: str, api_client: object) -> HavaResult:
        _ = api_client
        self.calls.append((environment_id, view_type))
        return self._result


class _JobWaiterStub:
    """Job waiter stub returning a fixed result."""

    def __init__(self, result: HavaResult):
        self._result = result
        self.waited_job_ids: list[str] = []

    def job_wait_for_completion(self, job_id: str, api_client: object) -> HavaResult:
        _ = api_client
        self.waited_job_ids.append(job_id)
        return self._result


_ACCEPTED = AdapterHttpResponse(status_code=202, body=b'{"job_id": "job-export-1"}')
_DOWNLOAD_URL = "https://downloads.example/export.png"


def _build_orchestrator(
    waiter_result: HavaResult | None = None,
    resolver_result: HavaResult | None = None,
) -> tuple[HavaExportOrchestrator, _JobWaiterStub, _ViewResolverStub]:
    waiter_stub = _JobWaiterStub(waiter_result or HavaResult.result_ok(_DOWNLOAD_URL))
    resolver_stub = _ViewResolverStub(resolver_result or HavaResult.result_ok("view-1"))
    orchestrator = HavaExportOrchestrator(
        job_waiter=waiter_stub,
        view_resolver=resolver_stub,
        image_writer=FileSystemImageWriter(),
    )
    return orchestrator, waiter_stub, resolver_stub


def test_jobs_export_orchestrator_exports_and_writes_image(tmp_path: Path) -> None:
    """Submit export, wait for redirect, download and write the PNG.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate request body, download and file content.

    Raises:
        AssertionError: Raised when the export flow is incomplete.
    """

    orchestrator, waiter_stub, resolver_stub = _build_orchestrator()
    api_stub = _ExportApiStub(_ACCEPTED)
    image_path = tmp_path / "nested" / "folder" / "diagram.png"

    result = orchestrator.job_export_view("env-1", "infrastructure", api_stub, str(image_path))

    assert result.success
    assert result.message == _DOWNLOAD_URL
    assert resolver_stub.calls == [("env-1", "infrastructure")]
    assert api_stub.export_calls == [("view-1", dict(EXPORT_REQUEST_BODY))]
    assert waiter_stub.waited_job_ids == ["job-export-1"]
    assert api_stub.download_urls == [_DOWNLOAD_URL]
    assert image_path.read_bytes() == _PNG_BYTES


def test_jobs_export_orchestrator_request_body_is_fixed() -> None:
    assert dict(EXPORT_REQUEST_BODY) == {
        "export_format": "png",
        "connections": True,
        "isometric": False,
        "labels": False,
    }


def test_jobs_export_orchestrator_overwrites_existing_image(tmp_path: Path) -> None:
    image_path = tmp_path / "diagram.png"
    image_path.write_bytes(b"old")
    orchestrator, _, _ = _build_orchestrator()

    result = orchestrator.job_export_view("env-1", "security", _ExportApiStub(_ACCEPTED), str(image_path))

    assert result.success
    assert image_path.read_bytes() == _PNG_BYTES


def test_jobs_export_orchestrator_rejects_unknown_view_type_before_network(tmp_path: Path) -> None:
    """Fail on unknown view type without resolving views or calling the API.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate short-circuit behavior.

    Raises:
        AssertionError: Raised when later stages run.
    """

    orchestrator, waiter_stub, resolver_stub = _build_orchestrator()
    api_stub = _ExportApiStub(_ACCEPTED)

    result = orchestrator.job_export_view("env-1", "Infrastructure", api_stub, str(tmp_path / "x.png"))

    assert not result.success
    assert result.error_code == HavaErrorCode.VALIDATION_ERROR
    assert resolver_stub.calls == []
    assert api_stub.export_calls == []
    assert waiter_stub.waited_job_ids == []


def test_jobs_export_orchestrator_resolver_failure_short_circuits(tmp_path: Path) -> None:
    resolver_failure = HavaResult.result_failed("No views matching type", HavaErrorCode.NOT_FOUND_ERROR)
    orchestrator, _, _ = _build_orchestrator(resolver_result=resolver_failure)
    api_stub = _ExportApiStub(_ACCEPTED)
    image_path = tmp_path / "x.png"

    result = orchestrator.job_export_view("env-1", "container", api_stub, str(image_path))

    assert result is resolver_failure
    assert api_stub.export_calls == []
    assert not image_path.exists()


@pytest.mark.parametrize(
    ("response", "error_code", "fragment"),
    [
        (AdapterHttpResponse(status_code=401), HavaErrorCode.AUTH_ERROR, "token"),
        (AdapterHttpResponse(status_code=404), HavaErrorCode.NOT_FOUND_ERROR, "should never happen"),
        (
            AdapterHttpResponse(status_code=422, body=b'{"message": "export_format is invalid"}'),
            HavaErrorCode.UNPROCESSABLE_ERROR,
            "export_format is invalid",
        ),
        (
            AdapterHttpResponse(status_code=500, body=b"internal boom"),
            HavaErrorCode.UNEXPECTED_STATUS_ERROR,
            "'500' Error from API: internal boom",
        ),
    ],
)
def test_jobs_export_orchestrator_maps_submit_statuses(
    tmp_path: Path,
    response: AdapterHttpResponse,
    error_code: HavaErrorCode,
    fragment: str,
) -> None:
    """Fail without waiting or writing when export submission is rejected.

    Args:
        tmp_path: Pytest temporary directory fixture.
        response: Export endpoint response.
        error_code: Expected failure class.
        fragment: Expected message fragment.

    Returns:
        None: Assertions validate failure mapping and absence of side effects.

    Raises:
        AssertionError: Raised when failure mapping is incorrect.
    """

    orchestrator, waiter_stub, _ = _build_orchestrator()
    api_stub = _ExportApiStub(response)
    image_path = tmp_path / "x.png"

    result = orchestrator.job_export_view("env-1", "infrastructure", api_stub, str(image_path))

    assert not result.success
    assert result.error_code == error_code
    assert fragment in result.message
    assert waiter_stub.waited_job_ids == []
    assert api_stub.download_urls == []
    assert not image_path.exists()


def test_jobs_export_orchestrator_in_band_completion_fails_without_location(tmp_path: Path) -> None:
    """Fail distinctly when the export job completes without a download location.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate missing-location failure and no file write.

    Raises:
        AssertionError: Raised when an empty location is treated as success.
    """

    orchestrator, _, _ = _build_orchestrator(waiter_result=HavaResult.result_ok(""))
    api_stub = _ExportApiStub(_ACCEPTED)
    image_path = tmp_path / "out" / "x.png"

    result = orchestrator.job_export_view("env-1", "infrastructure", api_stub, str(image_path))

    assert not result.success
    assert result.error_code == HavaErrorCode.MISSING_LOCATION_ERROR
    assert "download location" in result.message
    assert api_stub.download_urls == []
    assert not image_path.parent.exists()


def test_jobs_export_orchestrator_waiter_failure_is_returned(tmp_path: Path) -> None:
    waiter_failure = HavaResult.result_failed("Timed out waiting for job 'job-export-1'", HavaErrorCode.TIMEOUT_ERROR)
    orchestrator, _, _ = _build_orchestrator(waiter_result=waiter_failure)
    api_stub = _ExportApiStub(_ACCEPTED)

    result = orchestrator.job_export_view("env-1", "infrastructure", api_stub, str(tmp_path / "x.png"))

    assert result is waiter_failure
    assert api_stub.download_urls == []


@pytest.mark.parametrize(
    "download_response",
    [AdapterHttpResponse(status_code=403, body=b"denied"), HavaTransportError("connection reset")],
)
def test_jobs_export_orchestrator_download_failure_writes_nothing(
    tmp_path: Path,
    download_response: AdapterHttpResponse | Exception,
) -> None:
    """Leave the filesystem untouched when the download fails.

    Args:
        tmp_path: Pytest temporary directory fixture.
        download_response: Download outcome to simulate.

    Returns:
        None: Assertions validate failure and absent file.

    Raises:
        AssertionError: Raised when a file is written after a failed download.
    """

    orchestrator, _, _ = _build_orchestrator()
    api_stub = _ExportApiStub(_ACCEPTED, download_response=download_response)
    image_path = tmp_path / "out" / "x.png"

    result = orchestrator.job_export_view("env-1", "infrastructure", api_stub, str(image_path))

    assert not result.success
    assert result.error_code == HavaErrorCode.TRANSPORT_ERROR
    assert not image_path.parent.exists()


def test_jobs_export_orchestrator_download_redirect_loop_returns_failure(tmp_path: Path) -> None:
    """Report a storage redirect loop as a transport failure result.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate failure result and absent file.

    Raises:
        AssertionError: Raised when the redirect error escapes the orchestrator.
    """

    loop_url = "https://storage.example/loop.png"

    def _handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "storage.example":
            return httpx.Response(302, headers={"Location": loop_url})
        return httpx.Response(202, json={"job_id": "job-export-1"})

    orchestrator, _, _ = _build_orchestrator(waiter_result=HavaResult.result_ok(loop_url))
    image_path = tmp_path / "out" / "x.png"

    with HavaApiClient(token="secret-token", transport=httpx.MockTransport(_handler)) as api_client:
        result = orchestrator.job_export_view("env-1", "infrastructure", api_client, str(image_path))

    assert not result.success
    assert result.error_code == HavaErrorCode.TRANSPORT_ERROR
    assert not image_path.parent.exists()
