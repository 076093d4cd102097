"""
Exception hierarchy for Pod Reaper
"""

from typing import Optional


class PodReaperError(Exception):
    """Base class for all Pod Reaper errors"""


class ConfigError(PodReaperError):
    """Invalid startup configuration (bad timezone, interval, ...)"""


class ClusterConnectionError(PodReaperError):
    """Kubernetes credentials could not be loaded or the API is unreachable"""


class ListPodsError(PodReaperError):
    """Listing pods across all namespaces failed; the pass is aborted"""


class DeletePodError(PodReaperError):
    """Deleting a single pod failed"""

    def __init__(self, namespace: str, name: str, reason: str, status: Optional[int] = None):
        self.namespace = namespace
        self.name = name
        self.reason = reason
        self.status = status
        super().__init__(f"Failed to delete pod {namespace}/{name}: {reason}")
