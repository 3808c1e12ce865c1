"""Job layer package for sync and export workflow orchestration."""

from .interfaces import ExportOrchestratorPort, JobWaiterPort, SyncOrchestratorPort, ViewResolverPort
from .input_validation import (
	job_validate_image_path,
	job_validate_pipeline_input,
	job_validate_uuid,
	job_validate_view_type,
)
from .job_waiter import HavaJobWaiter
from .view_resolver import HavaViewResolver
from .export_orchestrator import EXPORT_REQUEST_BODY, HavaExportOrchestrator
from .sync_orchestrator import HavaSyncOrchestrator
from .pipeline import HavaPipelineDriver

__all__ = [
	"EXPORT_REQUEST_BODY",
	"ExportOrchestratorPort",
	"HavaExportOrchestrator",
	"HavaJobWaiter",
	"HavaPipelineDriver",
	"HavaSyncOrchestrator",
	"HavaViewResolver",
	"JobWaiterPort",
	"SyncOrchestratorPort",
	"ViewResolverPort",
	"job_validate_image_path",
	"job_validate_pipeline_input",
	"job_validate_uuid",
	"job_validate_view_type",
]
