"""Configuration management"""

from .config_loader import ConfigError, ConfigLoader
from .threading_config import AppConfig, CorrespondenceConfig, ThreadingConfig, TracingConfig

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "AppConfig",
    "CorrespondenceConfig",
    "ThreadingConfig",
    "TracingConfig",
]
