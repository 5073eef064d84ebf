"""Viewer configuration loader."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import yaml

from robotourney.core.fetch import DEFAULT_LOCATION

ENV_SOURCE = "ROBOTOURNEY_SOURCE"
ENV_REFRESH = "ROBOTOURNEY_REFRESH_S"
ENV_TIMEOUT = "ROBOTOURNEY_TIMEOUT_S"
ENV_LOG_LEVEL = "ROBOTOURNEY_LOG_LEVEL"


@dataclass
class ViewerConfig:
    source: str = DEFAULT_LOCATION  # URL or filesystem path
    refresh_interval_s: float = 5.0
    timeout_s: float = 10.0
    log_level: str = "WARNING"
    html_output: Path | None = None
    screen: bool = False  # full-screen rich Live display


def load_config(path: Path) -> ViewerConfig:
    """Load viewer config from YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    v = raw.get("viewer", {})
    html_output = v.get("html_output")

    return ViewerConfig(
        source=v.get("source", DEFAULT_LOCATION),
        refresh_interval_s=float(v.get("refresh_interval_s", 5.0)),
        timeout_s=float(v.get("timeout_s", 10.0)),
        log_level=str(v.get("log_level", "WARNING")).upper(),
        html_output=Path(html_output) if html_output else None,
        screen=bool(v.get("screen", False)),
    )


def apply_env_overrides(config: ViewerConfig, environ: Mapping[str, str] | None = None) -> ViewerConfig:
    """Apply ROBOTOURNEY_* environment variables on top of file config."""
    if environ is None:
        environ = os.environ

    if environ.get(ENV_SOURCE):
        config.source = environ[ENV_SOURCE]
    if environ.get(ENV_REFRESH):
        config.refresh_interval_s = float(environ[ENV_REFRESH])
    if environ.get(ENV_TIMEOUT):
        config.timeout_s = float(environ[ENV_TIMEOUT])
    if environ.get(ENV_LOG_LEVEL):
        config.log_level = environ[ENV_LOG_LEVEL].upper()
    return config
