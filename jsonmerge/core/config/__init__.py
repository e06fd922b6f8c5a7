"""
Merge run configuration.
"""

from .merge_config import DEFAULT_BATCH_SIZE, MergeConfig, MergeConfigLoader, build_config

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "MergeConfig",
    "MergeConfigLoader",
    "build_config",
]
