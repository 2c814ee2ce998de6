"""Configuration management for Docnav.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_FILENAME = "docnav.toml"


@dataclass
class NavigationConfig:
    """Navigation source configuration."""

    config_file: Path = field(default_factory=lambda: Path("docs/config.json"))


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = True
    debounce_ms: int = 50


@dataclass
class Config:
    """Application configuration."""

    navigation: NavigationConfig
    live_reload: LiveReloadConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for docnav.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Config:
        return cls(
            navigation=NavigationConfig(),
            live_reload=LiveReloadConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        navigation = cls._parse_navigation(data.get("navigation"), config_dir)
        live_reload = cls._parse_live_reload(data.get("live_reload"))

        return cls(
            navigation=navigation,
            live_reload=live_reload,
            config_path=path,
        )

    @classmethod
    def _parse_navigation(cls, data: object, config_dir: Path) -> NavigationConfig:
        """Parse navigation configuration section.

        Args:
            data: Raw navigation section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            NavigationConfig instance
        """
        if data is None:
            return NavigationConfig(config_file=config_dir / "docs" / "config.json")

        if not isinstance(data, dict):
            raise ValueError("navigation section must be a dictionary")

        config_file = data.get("config_file", "docs/config.json")
        if not isinstance(config_file, str):
            raise ValueError("navigation.config_file must be a string")

        return NavigationConfig(config_file=config_dir / config_file)

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
        """Parse live_reload configuration section.

        Args:
            data: Raw live_reload section data

        Returns:
            LiveReloadConfig instance
        """
        if data is None:
            return LiveReloadConfig()

        if not isinstance(data, dict):
            raise ValueError("live_reload section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        debounce_ms = data.get("debounce_ms", 50)
        if not isinstance(debounce_ms, int) or isinstance(debounce_ms, bool):
            raise ValueError("live_reload.debounce_ms must be an integer")
        if debounce_ms < 0:
            raise ValueError("live_reload.debounce_ms must not be negative")

        return LiveReloadConfig(enabled=enabled, debounce_ms=debounce_ms)
