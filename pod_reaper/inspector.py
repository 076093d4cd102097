"""
Remediation decision for a single pod.
"""

from typing import Optional

from pod_reaper.models import PodObservation, WaitingState

# Waiting reasons that mean the pod will not recover without being recreated
REMEDIABLE_WAITING_REASONS = frozenset({"CreateContainerError", "CrashLoopBackOff"})


def remediable_waiting_state(pod: PodObservation) -> Optional[WaitingState]:
    """Return the first waiting state that makes the pod eligible, if any"""
    for status in pod.container_statuses:
        if status.waiting and status.waiting.reason in REMEDIABLE_WAITING_REASONS:
            return status.waiting
    return None


def should_remediate(pod: PodObservation) -> bool:
    """Check if a pod is stuck and should be deleted"""
    return remediable_waiting_state(pod) is not None
