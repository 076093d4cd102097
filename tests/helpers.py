from pod_reaper.exceptions import DeletePodError
from pod_reaper.models import ContainerStatusObservation, PodObservation, WaitingState


def make_pod(name, namespace="default", *reasons):
    """Build a PodObservation; each reason is a waiting reason, None means running"""
    statuses = tuple(
        ContainerStatusObservation(
            name=f"container-{i}",
            waiting=WaitingState(reason=reason) if reason is not None else None
        )
        for i, reason in enumerate(reasons)
    )
    return PodObservation(name=name, namespace=namespace, container_statuses=statuses)


class FakeClusterClient:
    """In-memory stand-in for KubernetesClient"""

    def __init__(self, pods=None, list_error=None, failing_deletes=()):
        self.pods = list(pods or [])
        self.list_error = list_error
        self.failing_deletes = set(failing_deletes)
        self.list_calls = 0
        self.delete_calls = []
        self.on_list = None

    def list_all_pods(self):
        self.list_calls += 1
        if self.on_list:
            self.on_list(self)
        if self.list_error:
            raise self.list_error
        return list(self.pods)

    def delete_pod(self, namespace, name):
        self.delete_calls.append((namespace, name))
        if f"{namespace}/{name}" in self.failing_deletes:
            raise DeletePodError(namespace, name, "Not Found", status=404)
