"""Core app services for settings and logging."""

from .config import AppConfig, BenchmarkConfig, LoggingConfig, MonitorConfig, TelemetryConfig, load_config, save_config
from .logging_setup import configure_logging, get_logger, install_excepthook

__all__ = [
    "AppConfig",
    "BenchmarkConfig",
    "LoggingConfig",
    "MonitorConfig",
    "TelemetryConfig",
    "configure_logging",
    "get_logger",
    "install_excepthook",
    "load_config",
    "save_config",
]
