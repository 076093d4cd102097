"""
Prometheus metrics for remediation passes
"""

import time
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Gauge, start_http_server

from pod_reaper.logger import get_logger

logger = get_logger(__name__)


class ReaperMetrics:
    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()

        self.passes = Counter(
            'pod_reaper_passes_total',
            'Total number of remediation passes started',
            registry=self.registry
        )
        self.pass_failures = Counter(
            'pod_reaper_pass_failures_total',
            'Total number of passes aborted because pods could not be listed',
            registry=self.registry
        )
        self.pods_checked = Gauge(
            'pod_reaper_pods_checked',
            'Number of pods inspected in the last completed pass',
            registry=self.registry
        )
        self.remediations = Counter(
            'pod_reaper_remediations_total',
            'Pod deletions attempted, by outcome',
            ['namespace', 'outcome'],
            registry=self.registry
        )
        self.last_pass_timestamp = Gauge(
            'pod_reaper_last_pass_timestamp_seconds',
            'Unix time the last pass completed',
            registry=self.registry
        )

    def record_pass_started(self):
        self.passes.inc()

    def record_pass_failed(self):
        self.pass_failures.inc()

    def record_pass_completed(self, pods_checked):
        self.pods_checked.set(pods_checked)
        self.last_pass_timestamp.set(time.time())

    def record_remediation(self, namespace, success):
        self.remediations.labels(
            namespace=namespace,
            outcome='deleted' if success else 'failed'
        ).inc()

    def serve(self, port):
        """Expose metrics over HTTP on a background thread"""
        start_http_server(port, registry=self.registry)
        logger.info("Metrics server started", port=port)
