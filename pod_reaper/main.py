#!/usr/bin/env python3
"""
Kubernetes Pod Reaper - Main Application
"""

import argparse
import signal
import threading

from pod_reaper.config import LOG_FORMATS, load_config
from pod_reaper.exceptions import ClusterConnectionError, ConfigError
from pod_reaper.kubernetes_client import KubernetesClient
from pod_reaper.logger import PodReaperLogger, setup_logging
from pod_reaper.metrics import ReaperMetrics
from pod_reaper.reaper import PodReaper


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="pod-reaper",
        description="Delete pods stuck in CrashLoopBackOff or CreateContainerError"
    )
    parser.add_argument("--kubeconfig", dest="kube_config_path",
                        help="Path to kubeconfig file (out-of-cluster mode)")
    parser.add_argument("--in-cluster", dest="in_cluster", action="store_true", default=None,
                        help="Use the pod's service account credentials")
    parser.add_argument("--timezone", help="Timezone for log timestamps, e.g. Europe/Paris")
    parser.add_argument("--interval", dest="run_interval_seconds", type=int,
                        help="Seconds to wait between remediation passes")
    parser.add_argument("--log-level", dest="log_level")
    parser.add_argument("--log-format", dest="log_format", choices=LOG_FORMATS)
    parser.add_argument("--metrics-port", dest="metrics_port", type=int,
                        help="Serve Prometheus metrics on this port")
    return parser.parse_args(argv)


def install_signal_handlers(stop_event, reaper_logger):
    """Set ``stop_event`` on SIGTERM/SIGINT"""
    def handle(signum, frame):
        stop_event.set()
        reaper_logger.log_shutdown_signal(signal.Signals(signum).name)

    signal.signal(signal.SIGTERM, handle)
    signal.signal(signal.SIGINT, handle)


def main(argv=None):
    """Main application entry point"""
    args = parse_args(argv)

    try:
        config = load_config(**vars(args))
    except ConfigError as e:
        setup_logging()
        PodReaperLogger().log_fatal(e, context="configuration")
        return 1

    setup_logging(config)
    reaper_logger = PodReaperLogger()
    reaper_logger.log_startup(config.as_dict())
    reaper_logger.log_mode(config.in_cluster, config.expanded_kube_config_path)

    try:
        k8s_client = KubernetesClient(
            in_cluster=config.in_cluster,
            kube_config_path=config.kube_config_path
        )
    except ClusterConnectionError as e:
        reaper_logger.log_fatal(e, context="cluster connection")
        return 1

    stop_event = threading.Event()
    install_signal_handlers(stop_event, reaper_logger)

    metrics = ReaperMetrics()
    if config.metrics_port is not None:
        try:
            metrics.serve(config.metrics_port)
        except OSError as e:
            reaper_logger.log_fatal(e, context="metrics server")
            return 1

    reaper = PodReaper(
        k8s_client,
        interval_seconds=config.run_interval_seconds,
        reaper_logger=reaper_logger,
        metrics=metrics
    )
    reaper.run(stop_event)
    return 0


def run():
    raise SystemExit(main())


if __name__ == "__main__":
    run()
