from unittest.mock import Mock

import pytest
from prometheus_client import CollectorRegistry

from pod_reaper.metrics import ReaperMetrics


@pytest.fixture
def metrics():
    return ReaperMetrics(registry=CollectorRegistry())


@pytest.fixture
def reaper_logger():
    return Mock()


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("IN_CLUSTER", "inCluster", "KUBE_CONFIG_PATH", "KUBECONFIG", "TIMEZONE",
                 "RUN_INTERVAL_SECONDS", "LOG_LEVEL", "LOG_FORMAT", "METRICS_PORT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
