"""Configuration models and loaders."""

from .config import Config, FetcherConfig, HNConfig, MonitoringConfig, WebConfig, find_config_file, load_config

__all__ = [
    "Config",
    "FetcherConfig",
    "HNConfig",
    "MonitoringConfig",
    "WebConfig",
    "find_config_file",
    "load_config",
]
