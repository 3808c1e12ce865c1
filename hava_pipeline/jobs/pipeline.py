"""Pipeline driver sequencing validation, sync and export stages."""

from __future__ import annotations

import logging
from typing import Callable

from hava_pipeline.adapters import HavaApiPort
from hava_pipeline.domain import HavaResult, PipelineInput

from .input_validation import job_validate_pipeline_input
from .interfaces import ExportOrchestratorPort, SyncOrchestratorPort


logger = logging.getLogger(__name__)


class HavaPipelineDriver:
    """Single entry point for one sync and optional export run.

    Stages run strictly in order `validate -> sync -> export` and the first
    failure ends the run. The intended image path is reported once network
    activity has started, even when sync later fails.
    """

    def __init__(
        self,
        sync_orchestrator: SyncOrchestratorPort,
        export_orchestrator: ExportOrchestratorPort,
        api_client_factory: Callable[[str], HavaApiPort],
        output_reporter: Callable[[str], None] | None = None,
    ):
        """Initialize pipeline driver dependencies.

        Args:
            sync_orchestrator: Sync stage implementation.
            export_orchestrator: Export stage implementation.
            api_client_factory: Builds an authenticated API client from a token.
            output_reporter: Receives the intended image path side output.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies are missing.
        """

        if sync_orchestrator is None:
            raise ValueError("sync_orchestrator must not be None")
        if export_orchestrator is None:
            raise ValueError("export_orchestrator must not be None")
        if api_client_factory is None:
            raise ValueError("api_client_factory must not be None")

        self._sync_orchestrator = sync_orchestrator
        self._export_orchestrator = export_orchestrator
        self._api_client_factory = api_client_factory
        self._output_reporter = output_reporter or (lambda image_path: None)

    def job_run(self, pipeline_input: PipelineInput) -> HavaResult:
        """Run validation, sync and, unless skipped, export.

        Args:
            pipeline_input: Parameters for this run.

        Returns:
            HavaResult: Aggregated validation failure, first stage failure,
            sync success when export is skipped, or export result.

        Raises:
            RuntimeError: This method reports failures through the result.
        """

        validation_result = job_validate_pipeline_input(pipeline_input)
        if not validation_result.success:
            return validation_result

        api_client = self._api_client_factory(pipeline_input.hava_token)
        try:
            sync_result = self._sync_orchestrator.job_sync_source(pipeline_input.source_id, api_client)
            self._output_reporter(pipeline_input.image_path)

            if not sync_result.success:
                return sync_result

            if pipeline_input.skip_export:
                logger.info("Export skipped")
                return sync_result

            return self._export_orchestrator.job_export_view(
                pipeline_input.environment_id,
                pipeline_input.view_type,
                api_client,
                pipeline_input.image_path,
            )
        finally:
            api_client.adapter_close()
