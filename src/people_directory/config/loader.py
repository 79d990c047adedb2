"""
Configuration Loader - Directory Config from YAML.

A config directory holds `default.yaml` plus named overlays under
`profiles/`:

    config/
        default.yaml
        profiles/
            offline.yaml
            throttled.yaml

A profile is a partial document deep-merged over the base file; the merged
result is validated as one DirectoryConfig. Runtime overrides (CLI flags,
one-shot runs) go through the same merge and validation.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from people_directory.config.models import DirectoryConfig
from people_directory.resilience.errors import ConfigError

logger = logging.getLogger(__name__)

# <repo>/config when running from a source checkout (src layout)
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[3] / "config"
DEFAULT_CONFIG_FILE = "default.yaml"
PROFILES_DIR = "profiles"


def deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Merge overlay into a copy of base; nested sections merge key by key."""
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Loads DirectoryConfig from a config directory."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None) -> None:
        """
        Initialize config loader.

        Args:
            config_dir: Directory holding default.yaml and profiles/
                (the repository's config/ directory if None)
        """
        self.config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR

    @property
    def default_path(self) -> Path:
        return self.config_dir / DEFAULT_CONFIG_FILE

    @property
    def profiles_dir(self) -> Path:
        return self.config_dir / PROFILES_DIR

    def available_profiles(self) -> List[str]:
        """Profile names found under profiles/, sorted."""
        if not self.profiles_dir.is_dir():
            return []
        return sorted(p.stem for p in self.profiles_dir.glob("*.yaml"))

    def load(
        self,
        config_path: Optional[Union[str, Path]] = None,
        profile: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> DirectoryConfig:
        """
        Load, merge and validate a configuration.

        Args:
            config_path: Base YAML file (default.yaml in the config
                directory if None)
            profile: Name of an overlay under profiles/
            overrides: Nested values applied last

        Returns:
            Validated DirectoryConfig

        Raises:
            FileNotFoundError: Base file missing
            ConfigError: Unknown profile or a file that is not a mapping
            ValidationError: Merged values invalid
        """
        path = Path(config_path) if config_path else self.default_path
        data = self._read_mapping(path)

        if profile:
            data = deep_merge(data, self.profile_overlay(profile))
        if overrides:
            data = deep_merge(data, overrides)

        config = DirectoryConfig.model_validate(data)
        logger.debug(
            f"Loaded config from {path}"
            + (f" with profile {profile!r}" if profile else "")
            + f" (backend={config.grouping.backend}, page_size={config.pagination.page_size})"
        )
        return config

    def profile_overlay(self, profile: str) -> Dict[str, Any]:
        """Raw overlay of a named profile."""
        available = self.available_profiles()
        if profile not in available:
            listed = ", ".join(available) or "none"
            raise ConfigError(f"Unknown profile {profile!r} (available: {listed})")
        return self._read_mapping(self.profiles_dir / f"{profile}.yaml")

    def load_from_dict(self, config_dict: Dict[str, Any]) -> DirectoryConfig:
        return DirectoryConfig.model_validate(config_dict)

    def _read_mapping(self, path: Path) -> Dict[str, Any]:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")
        return data


def with_overrides(config: DirectoryConfig, overrides: Dict[str, Any]) -> DirectoryConfig:
    """Copy of config with nested overrides applied and re-validated."""
    return DirectoryConfig.model_validate(deep_merge(config.model_dump(), overrides))


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    profile: Optional[str] = None,
    config_dir: Optional[Union[str, Path]] = None,
) -> DirectoryConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Base YAML file (config_dir/default.yaml if None)
        profile: Optional profile name under config_dir/profiles
        config_dir: Config directory (the repository's config/ if None)

    Returns:
        Validated DirectoryConfig
    """
    return ConfigLoader(config_dir).load(config_path, profile)
