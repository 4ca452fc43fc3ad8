"""Job layer package for bootstrap workflow orchestration boundaries."""

from .bootstrap_orchestrator import BootstrapOrchestrator, BootstrapOrchestratorConfig
from .cleanup_timer import CleanupTimer, job_cleanup_remove_paths
from .config_emitter import job_config_build_document, job_config_write_document
from .health_aggregator import HealthAggregator
from .interfaces import JobExecutionResult, JobOrchestratorPort
from .service_launcher import ServiceLauncher

__all__ = [
	"BootstrapOrchestrator",
	"BootstrapOrchestratorConfig",
	"CleanupTimer",
	"HealthAggregator",
	"JobExecutionResult",
	"JobOrchestratorPort",
	"ServiceLauncher",
	"job_cleanup_remove_paths",
	"job_config_build_document",
	"job_config_write_document",
]
