"""Configuration loading and schema for packnga."""

from .manager import ConfigManager
from .schema import PackngaConfig, PublishConfig, ReferenceConfig, ReleaseConfig

__all__ = [
    "ConfigManager",
    "PackngaConfig",
    "PublishConfig",
    "ReferenceConfig",
    "ReleaseConfig",
]
