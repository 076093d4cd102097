"""
Logging configuration for Pod Reaper
"""

import logging
import sys
from datetime import datetime, timezone, tzinfo
from typing import Any, Dict, List, Optional

import structlog
from colorama import init as colorama_init

from pod_reaper import __version__
from pod_reaper.config import Config
from pod_reaper.exceptions import DeletePodError

# Initialize colorama for cross-platform colored output
colorama_init()

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %Z"


class ZonedTimeStamper:
    """structlog processor stamping events with wall-clock time in a fixed timezone"""

    def __init__(self, tz: tzinfo, fmt: str = TIMESTAMP_FORMAT, key: str = "timestamp"):
        self.tz = tz
        self.fmt = fmt
        self.key = key

    def __call__(self, logger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        event_dict[self.key] = datetime.now(self.tz).strftime(self.fmt)
        return event_dict


def setup_logging(config: Optional[Config] = None) -> None:
    """Setup structured logging for the application"""
    tz = config.tzinfo if config else timezone.utc
    log_format = config.log_format if config else "json"
    log_level = config.log_level if config else "INFO"

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            ZonedTimeStamper(tz),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if log_format == "json"
            else structlog.dev.ConsoleRenderer(colors=True)
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level),
        force=True,
    )

    # Suppress verbose kubernetes client logs
    logging.getLogger("kubernetes").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)


class PodReaperLogger:
    """Specialized logger for Pod Reaper operations"""

    def __init__(self):
        self.logger = get_logger("pod-reaper")

    def log_startup(self, config_dict: Dict[str, Any]) -> None:
        """Log application startup"""
        self.logger.info(
            "Pod Reaper starting up",
            version=__version__,
            config=config_dict
        )

    def log_mode(self, in_cluster: bool, kube_config_path: Optional[str] = None) -> None:
        """Log which credential source is used"""
        if in_cluster:
            self.logger.info("Using in-cluster configuration", mode="in-cluster")
        else:
            self.logger.info(
                "Using out-of-cluster configuration",
                mode="out-of-cluster",
                kubeconfig=kube_config_path
            )

    def log_loop_start(self, interval_seconds: float) -> None:
        self.logger.info(
            "Starting Pod Reaper controller",
            interval_seconds=interval_seconds
        )

    def log_pass_start(self, pass_id: int) -> None:
        self.logger.debug("Starting remediation pass", pass_id=pass_id)

    def log_remediation_intent(self, namespace: str, pod_name: str, reason: Optional[str],
                               message: Optional[str] = None) -> None:
        """Log a pod about to be deleted"""
        self.logger.info(
            "Remediating pod",
            namespace=namespace,
            pod_name=pod_name,
            reason=reason,
            waiting_message=message
        )

    def log_remediation_success(self, namespace: str, pod_name: str) -> None:
        self.logger.info(
            "Pod deleted successfully",
            namespace=namespace,
            pod_name=pod_name
        )

    def log_remediation_failure(self, namespace: str, pod_name: str, error: DeletePodError) -> None:
        self.logger.error(
            "Failed to delete pod",
            namespace=namespace,
            pod_name=pod_name,
            reason=error.reason,
            status=error.status
        )

    def log_pass_end(self, pass_id: int, pods_checked: int, deleted: List[str],
                     failed: List[str], duration_seconds: float) -> None:
        """Log the end of a remediation pass"""
        self.logger.info(
            "Remediation pass completed",
            pass_id=pass_id,
            total_pods_checked=pods_checked,
            deleted_pods=deleted,
            failed_pods=failed,
            duration_seconds=round(duration_seconds, 3)
        )

    def log_pass_error(self, pass_id: int, error: Exception) -> None:
        """Log a pass aborted before any remediation"""
        self.logger.error(
            "Error during remediation",
            pass_id=pass_id,
            error=str(error),
            error_type=type(error).__name__
        )

    def log_shutdown_signal(self, signal_name: str) -> None:
        self.logger.info(
            f"Received {signal_name}, shutting down gracefully",
            signal=signal_name
        )

    def log_stopped(self, passes: int) -> None:
        self.logger.info("Polling stopped due to cancellation", passes=passes)

    def log_fatal(self, error: Exception, context: str) -> None:
        """Log an error that prevents the controller from starting"""
        self.logger.critical(
            "Fatal startup error",
            error=str(error),
            error_type=type(error).__name__,
            context=context
        )
