import signal
import threading
from unittest.mock import Mock, patch

import pytest

from pod_reaper import main as main_module
from pod_reaper.exceptions import ClusterConnectionError


@pytest.fixture
def patched(clean_env):
    with patch.object(main_module, "setup_logging"), \
            patch.object(main_module, "PodReaperLogger") as logger_cls, \
            patch.object(main_module, "KubernetesClient") as client_cls, \
            patch.object(main_module, "install_signal_handlers") as install, \
            patch.object(main_module, "PodReaper") as reaper_cls:
        yield Mock(
            logger=logger_cls.return_value,
            client_cls=client_cls,
            install=install,
            reaper_cls=reaper_cls,
        )


def test_clean_shutdown_returns_zero(patched):
    assert main_module.main(["--kubeconfig", "/tmp/kubeconfig", "--interval", "5"]) == 0

    patched.client_cls.assert_called_once_with(in_cluster=False, kube_config_path="/tmp/kubeconfig")
    patched.logger.log_mode.assert_called_once_with(False, "/tmp/kubeconfig")
    reaper_kwargs = patched.reaper_cls.call_args.kwargs
    assert reaper_kwargs["interval_seconds"] == 5

    stop_event = patched.install.call_args.args[0]
    assert isinstance(stop_event, threading.Event)
    patched.reaper_cls.return_value.run.assert_called_once_with(stop_event)


def test_in_cluster_flag(patched):
    main_module.main(["--in-cluster"])

    patched.client_cls.assert_called_once_with(in_cluster=True, kube_config_path="~/.kube/config")
    assert patched.logger.log_mode.call_args.args[0] is True


def test_invalid_timezone_is_fatal(patched):
    assert main_module.main(["--timezone", "Not/AZone"]) == 1

    patched.logger.log_fatal.assert_called_once()
    patched.client_cls.assert_not_called()
    patched.reaper_cls.assert_not_called()


def test_unreachable_cluster_is_fatal(patched):
    patched.client_cls.side_effect = ClusterConnectionError("connection refused")

    assert main_module.main([]) == 1

    patched.logger.log_fatal.assert_called_once()
    patched.reaper_cls.assert_not_called()


def test_signal_handler_sets_stop_event():
    stop_event = threading.Event()
    reaper_logger = Mock()
    previous = {sig: signal.getsignal(sig) for sig in (signal.SIGTERM, signal.SIGINT)}

    try:
        main_module.install_signal_handlers(stop_event, reaper_logger)
        handler = signal.getsignal(signal.SIGTERM)
        handler(signal.SIGTERM, None)
    finally:
        for sig, original in previous.items():
            signal.signal(sig, original)

    assert stop_event.is_set()
    reaper_logger.log_shutdown_signal.assert_called_once_with("SIGTERM")


@pytest.mark.parametrize("env, value, flags", [
    ("TIMEZONE", "Not/AZone", ["--timezone", "UTC"]),
    ("RUN_INTERVAL_SECONDS", "0", ["--interval", "5"]),
])
def test_flags_override_invalid_environment(patched, clean_env, env, value, flags):
    clean_env.setenv(env, value)

    assert main_module.main(flags) == 0

    patched.logger.log_fatal.assert_not_called()
    patched.reaper_cls.return_value.run.assert_called_once()


def test_metrics_port_in_use_is_fatal(patched):
    with patch.object(main_module.ReaperMetrics, "serve",
                      side_effect=OSError(98, "Address already in use")):
        assert main_module.main(["--metrics-port", "9100"]) == 1

    assert patched.logger.log_fatal.call_args.kwargs["context"] == "metrics server"
    patched.reaper_cls.return_value.run.assert_not_called()


def test_stop_event_is_set_even_if_logging_fails():
    stop_event = threading.Event()
    reaper_logger = Mock()
    reaper_logger.log_shutdown_signal.side_effect = BrokenPipeError("stdout closed")
    previous = {sig: signal.getsignal(sig) for sig in (signal.SIGTERM, signal.SIGINT)}

    try:
        main_module.install_signal_handlers(stop_event, reaper_logger)
        handler = signal.getsignal(signal.SIGINT)
        with pytest.raises(BrokenPipeError):
            handler(signal.SIGINT, None)
    finally:
        for sig, original in previous.items():
            signal.signal(sig, original)

    assert stop_event.is_set()
