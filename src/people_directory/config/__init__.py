"""
Configuration Package - Models and Loaders.

This package handles all configuration aspects of the People Directory:
    - Pydantic models for type-safe configuration
    - YAML loader over a config directory (default.yaml + profiles/)
    - Profile overlays and runtime overrides, deep merged then validated

Configuration Structure:
    - DirectoryConfig: Root configuration object
    - ApiConfig: Upstream URL, seed, timeout
    - PaginationConfig: Page size
    - SearchConfig: Debounce window
    - GroupingConfig: Backend selection, default criterion
    - AutoContinuationConfig: Follow-up loading policy
    - LoggingConfig: Level and rendering

Design Principles:
    - Type-safe via Pydantic
    - Validation on load (fail fast)
    - Support for profiles (e.g. offline, throttled)
"""

from people_directory.config.loader import (
    ConfigLoader,
    deep_merge,
    load_config,
    with_overrides,
)
from people_directory.config.models import (
    ApiConfig,
    AutoContinuationConfig,
    DirectoryConfig,
    GroupingConfig,
    LoggingConfig,
    PaginationConfig,
    SearchConfig,
)

__all__ = [
    "ConfigLoader",
    "deep_merge",
    "load_config",
    "with_overrides",
    "ApiConfig",
    "AutoContinuationConfig",
    "DirectoryConfig",
    "GroupingConfig",
    "LoggingConfig",
    "PaginationConfig",
    "SearchConfig",
]
