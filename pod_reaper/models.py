"""
Immutable snapshots of the pod state Pod Reaper inspects.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class WaitingState:
    """Why a container has not started yet."""
    reason: str = ""
    message: Optional[str] = None


@dataclass(frozen=True)
class ContainerStatusObservation:
    """Observed status of a single container."""
    name: str
    waiting: Optional[WaitingState] = None


@dataclass(frozen=True)
class PodObservation:
    """A pod as seen by one listing call."""
    name: str
    namespace: str
    container_statuses: Tuple[ContainerStatusObservation, ...] = ()

    @property
    def key(self) -> str:
        return f"{self.namespace}/{self.name}"
