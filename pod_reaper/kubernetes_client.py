import os
from typing import List, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException

from pod_reaper.config import DEFAULT_KUBE_CONFIG_PATH
from pod_reaper.exceptions import ClusterConnectionError, DeletePodError, ListPodsError
from pod_reaper.logger import get_logger
from pod_reaper.models import ContainerStatusObservation, PodObservation, WaitingState

logger = get_logger(__name__)


def observe_pod(pod) -> PodObservation:
    """Convert a V1Pod into an immutable PodObservation"""
    statuses = []
    for container_status in (pod.status and pod.status.container_statuses) or []:
        waiting = None
        state = container_status.state
        if state and state.waiting:
            waiting = WaitingState(
                reason=state.waiting.reason or "",
                message=state.waiting.message
            )
        statuses.append(ContainerStatusObservation(name=container_status.name, waiting=waiting))

    return PodObservation(
        name=pod.metadata.name,
        namespace=pod.metadata.namespace,
        container_statuses=tuple(statuses)
    )


class KubernetesClient:
    def __init__(self, in_cluster: bool = False, kube_config_path: Optional[str] = None):
        try:
            if in_cluster:
                config.load_incluster_config()
                logger.info("Loaded in-cluster Kubernetes configuration")
            else:
                kube_config_path = os.path.expanduser(kube_config_path or DEFAULT_KUBE_CONFIG_PATH)
                if not os.path.exists(kube_config_path):
                    raise ClusterConnectionError(f"kubeconfig not found: {kube_config_path}")
                config.load_kube_config(config_file=kube_config_path)
                logger.info("Loaded kubeconfig", path=kube_config_path)
        except ClusterConnectionError:
            raise
        except Exception as e:
            # ConfigException, but also yaml errors for a malformed kubeconfig and OSError
            logger.error("Failed to initialize Kubernetes client", error=str(e))
            raise ClusterConnectionError(f"Failed to load Kubernetes configuration: {e}") from e

        self.v1 = client.CoreV1Api()

        # Test the connection
        try:
            self.v1.get_api_resources()
        except Exception as e:
            raise ClusterConnectionError(f"Kubernetes API is unreachable: {e}") from e
        logger.info("Kubernetes client initialized successfully")

    def list_all_pods(self) -> List[PodObservation]:
        """List all pods from all namespaces"""
        try:
            pods = self.v1.list_pod_for_all_namespaces(watch=False)
        except Exception as e:
            raise ListPodsError(f"Failed to list pods: {e}") from e
        return [observe_pod(pod) for pod in pods.items]

    def delete_pod(self, namespace: str, name: str) -> None:
        """Delete a pod"""
        try:
            self.v1.delete_namespaced_pod(
                name=name,
                namespace=namespace,
                body=client.V1DeleteOptions()
            )
        except ApiException as e:
            raise DeletePodError(namespace, name, e.reason or str(e), status=e.status) from e
        except Exception as e:
            raise DeletePodError(namespace, name, str(e)) from e
