"""Typed interfaces for job-layer orchestration responsibilities."""

from typing import Protocol

from hava_pipeline.adapters import HavaApiPort
from hava_pipeline.domain import HavaResult


class JobWaiterPort(Protocol):
    """Port definition for waiting on asynchronous vendor jobs."""

    def job_wait_for_completion(self, job_id: str, api_client: HavaApiPort) -> HavaResult:
        """Poll one job until it completes, fails or times out.

        Args:
            job_id: Vendor job identifier.
            api_client: Authenticated API client for status requests.

        Returns:
            HavaResult: Success with optional redirect location, or failure diagnostic.
        """


class ViewResolverPort(Protocol):
    """Port definition for locating a view of a given type in an environment."""

    def view_resolve_id(self, environment_id: str, view_type: str, api_client: HavaApiPort) -> HavaResult:
        """Resolve the id of the first view matching a logical view type.

        Args:
            environment_id: Environment identifier.
            view_type: Logical view type key.
            api_client: Authenticated API client.

        Returns:
            HavaResult: Success carrying the view id, or failure diagnostic.
        """


class SyncOrchestratorPort(Protocol):
    """Port definition for the source sync stage."""

    def job_sync_source(self, source_id: str, api_client: HavaApiPort) -> HavaResult:
        """Trigger a source sync and wait for it to finish.

        Args:
            source_id: Source identifier.
            api_client: Authenticated API client.

        Returns:
            HavaResult: Sync outcome.
        """


class ExportOrchestratorPort(Protocol):
    """Port definition for the view export stage."""

    def job_export_view(
        self,
        environment_id: str,
        view_type: str,
        api_client: HavaApiPort,
        image_path: str,
    ) -> HavaResult:
        """Export one environment view as PNG and write it to disk.

        Args:
            environment_id: Environment identifier.
            view_type: Logical view type key.
            api_client: Authenticated API client.
            image_path: Output file path.

        Returns:
            HavaResult: Success carrying the download location, or failure diagnostic.
        """
