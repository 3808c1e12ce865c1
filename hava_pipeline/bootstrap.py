"""Application bootstrap wiring for pipeline dependency assembly."""

from __future__ import annotations

from functools import partial
from typing import Callable

import httpx

from hava_pipeline.adapters import FileSystemImageWriter, HavaApiClient
from hava_pipeline.config import AppSettings
from hava_pipeline.jobs import (
    HavaExportOrchestrator,
    HavaJobWaiter,
    HavaPipelineDriver,
    HavaSyncOrchestrator,
    HavaViewResolver,
)


def bootstrap_create_pipeline_driver(
    settings: AppSettings,
    output_reporter: Callable[[str], None] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> HavaPipelineDriver:
    """Assemble the pipeline driver from validated settings.

    Args:
        settings: Validated runtime settings.
        output_reporter: Receives the image path side output.
        transport: Optional httpx transport override for API clients.

    Returns:
        HavaPipelineDriver: Fully wired pipeline driver.

    Raises:
        ValueError: Raised when tuning values are invalid.
    """

    job_waiter = HavaJobWaiter(
        timeout_seconds=settings.hava_job_timeout_seconds,
        poll_interval_seconds=settings.hava_job_poll_interval_seconds,
    )
    api_client_factory = partial(
        HavaApiClient,
        base_url=settings.hava_api_base_url,
        request_timeout_seconds=settings.hava_request_timeout_seconds,
        transport=transport,
    )
    return HavaPipelineDriver(
        sync_orchestrator=HavaSyncOrchestrator(job_waiter=job_waiter),
        export_orchestrator=HavaExportOrchestrator(
            job_waiter=job_waiter,
            view_resolver=HavaViewResolver(),
            image_writer=FileSystemImageWriter(),
        ),
        api_client_factory=api_client_factory,
        output_reporter=output_reporter,
    )
