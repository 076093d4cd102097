import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional

from pod_reaper.exceptions import DeletePodError, ListPodsError
from pod_reaper.inspector import remediable_waiting_state
from pod_reaper.logger import PodReaperLogger
from pod_reaper.metrics import ReaperMetrics
from pod_reaper.models import PodObservation, WaitingState

DEFAULT_INTERVAL_SECONDS = 10


@dataclass
class PassResult:
    """Outcome of one list-evaluate-delete pass"""
    pass_id: int
    pods_checked: int = 0
    deleted: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def remediated(self) -> int:
        return len(self.deleted) + len(self.failed)


class PodReaper:
    """
    Deletes pods stuck in a remediable waiting state.

    ``k8s_client`` needs two methods: ``list_all_pods()`` returning
    PodObservations (raising ListPodsError on failure) and
    ``delete_pod(namespace, name)`` (raising DeletePodError on failure).
    """

    def __init__(self, k8s_client, interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
                 reaper_logger: Optional[PodReaperLogger] = None,
                 metrics: Optional[ReaperMetrics] = None):
        self.k8s_client = k8s_client
        self.interval_seconds = interval_seconds
        self.logger = reaper_logger or PodReaperLogger()
        self.metrics = metrics or ReaperMetrics()

    def remediate_pod(self, pod: PodObservation, waiting: Optional[WaitingState] = None) -> bool:
        """Delete a pod so its controller recreates it; never raises for delete failures"""
        self.logger.log_remediation_intent(
            pod.namespace, pod.name,
            waiting.reason if waiting else None,
            waiting.message if waiting else None
        )
        try:
            self.k8s_client.delete_pod(pod.namespace, pod.name)
        except DeletePodError as e:
            self.logger.log_remediation_failure(pod.namespace, pod.name, e)
            self.metrics.record_remediation(pod.namespace, success=False)
            return False

        self.logger.log_remediation_success(pod.namespace, pod.name)
        self.metrics.record_remediation(pod.namespace, success=True)
        return True

    def run_pass(self, pass_id: int = 1) -> PassResult:
        """
        Run one remediation pass.

        Raises ListPodsError if pods cannot be listed, in which case no
        pod is touched. Delete failures are isolated per pod.
        """
        start_time = time.monotonic()
        self.logger.log_pass_start(pass_id)
        self.metrics.record_pass_started()

        pods = self.k8s_client.list_all_pods()

        result = PassResult(pass_id=pass_id, pods_checked=len(pods))
        seen = set()
        for pod in pods:
            waiting = remediable_waiting_state(pod)
            if waiting is None or pod.key in seen:
                continue
            seen.add(pod.key)
            if self.remediate_pod(pod, waiting):
                result.deleted.append(pod.key)
            else:
                result.failed.append(pod.key)

        result.duration_seconds = time.monotonic() - start_time
        self.metrics.record_pass_completed(result.pods_checked)
        self.logger.log_pass_end(
            pass_id, result.pods_checked, result.deleted, result.failed, result.duration_seconds
        )
        return result

    def run(self, stop_event: threading.Event) -> int:
        """
        Run passes until ``stop_event`` is set, returning the number of passes started.

        The interval is measured from the end of one pass to the start of
        the next. Setting the event never interrupts a pass in flight; it
        only prevents the next one from starting and cuts the wait short.
        """
        self.logger.log_loop_start(self.interval_seconds)

        pass_count = 0
        while not stop_event.is_set():
            pass_count += 1
            try:
                self.run_pass(pass_count)
            except ListPodsError as e:
                self.metrics.record_pass_failed()
                self.logger.log_pass_error(pass_count, e)

            if stop_event.wait(self.interval_seconds):
                break

        self.logger.log_stopped(pass_count)
        return pass_count
