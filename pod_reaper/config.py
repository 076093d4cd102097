"""
Configuration management for Pod Reaper
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from pod_reaper.exceptions import ConfigError

# Load environment variables
load_dotenv()

DEFAULT_KUBE_CONFIG_PATH = "~/.kube/config"
LOG_FORMATS = ("json", "console")


def _env_flag(*names: str) -> Optional[bool]:
    for name in names:
        value = os.getenv(name)
        if value is not None:
            return value.strip().lower() == "true"
    return None


def _parse_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


@dataclass
class Config:
    """Configuration class for Pod Reaper"""

    # Kubernetes configuration
    in_cluster: bool = False
    kube_config_path: str = DEFAULT_KUBE_CONFIG_PATH

    # Scheduling configuration
    run_interval_seconds: int = 10

    # Logging configuration
    timezone: str = "UTC"
    log_level: str = "INFO"
    log_format: str = "json"

    # Metrics
    metrics_port: Optional[int] = None

    tzinfo: ZoneInfo = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Apply environment overrides; call validate() once all sources are merged"""
        in_cluster = _env_flag("IN_CLUSTER", "inCluster")
        if in_cluster is not None:
            self.in_cluster = in_cluster

        self.kube_config_path = (
            os.getenv("KUBE_CONFIG_PATH") or os.getenv("KUBECONFIG") or self.kube_config_path
        )
        self.timezone = os.getenv("TIMEZONE") or self.timezone
        self.run_interval_seconds = os.getenv("RUN_INTERVAL_SECONDS", self.run_interval_seconds)
        self.log_level = os.getenv("LOG_LEVEL", self.log_level)
        self.log_format = os.getenv("LOG_FORMAT", self.log_format)
        self.metrics_port = os.getenv("METRICS_PORT") or self.metrics_port

    def validate(self) -> None:
        """Normalize field values, raising ConfigError on anything invalid"""
        self.run_interval_seconds = _parse_int("run interval", self.run_interval_seconds)
        if self.run_interval_seconds <= 0:
            raise ConfigError(
                f"run interval must be positive, got {self.run_interval_seconds}"
            )

        if self.metrics_port is not None:
            self.metrics_port = _parse_int("metrics port", self.metrics_port)
            if not 0 < self.metrics_port < 65536:
                raise ConfigError(f"metrics port out of range: {self.metrics_port}")

        self.log_format = self.log_format.lower()
        if self.log_format not in LOG_FORMATS:
            raise ConfigError(
                f"log format must be one of {', '.join(LOG_FORMATS)}, got {self.log_format!r}"
            )

        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"Invalid log level: {self.log_level}")

        try:
            self.tzinfo = ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError, OSError) as e:
            raise ConfigError(f"Invalid timezone: {self.timezone}") from e

    def update(self, **overrides: Any) -> "Config":
        """Apply non-None overrides (e.g. from the command line) and revalidate"""
        for key, value in overrides.items():
            if value is not None:
                setattr(self, key, value)
        self.validate()
        return self

    @property
    def expanded_kube_config_path(self) -> str:
        return os.path.expanduser(self.kube_config_path)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "in_cluster": self.in_cluster,
            "kube_config_path": None if self.in_cluster else self.kube_config_path,
            "run_interval_seconds": self.run_interval_seconds,
            "timezone": self.timezone,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "metrics_port": self.metrics_port,
        }


def load_config(**overrides: Any) -> Config:
    """Build a validated Config from defaults, .env, the environment and ``overrides``"""
    return Config().update(**overrides)
