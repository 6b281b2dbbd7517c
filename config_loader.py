#!/usr/bin/env python3
"""
Configuration loader for the channel tools MCP server and gateway.
"""

import json
import os
import sys
from pathlib import Path
from typing import Dict, Any, Optional

from dotenv import load_dotenv

# Load .env from the same folder as this file, regardless of cwd
load_dotenv(dotenv_path=Path(__file__).parent / ".env")

# Distinguishes "no default given" from an explicit default of None
_MISSING = object()


class Config:
    """Configuration manager for the channel tools server."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration from JSON file.

        Args:
            config_path: Path to config file. Uses default if None.
        """
        if config_path is None:
            self.config_path = Path(__file__).parent / "config.json"
        else:
            self.config_path = Path(config_path)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Config file not found at {self.config_path}. Please ensure config.json exists.")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file: {e}. Please fix the config.json file.")

    def get(self, section: str, key: str, default: Any = _MISSING) -> Any:
        """
        Get a configuration value.

        Args:
            section: Configuration section (e.g., 'dataset')
            key: Configuration key (e.g., 'default_path')
            default: Value returned if the section or key is missing (None is a valid default)

        Returns:
            Configuration value

        Raises:
            KeyError: If section or key not found and no default provided
        """
        if section not in self._config:
            if default is not _MISSING:
                return default
            raise KeyError(f"Configuration section '{section}' not found")

        if key not in self._config[section]:
            if default is not _MISSING:
                return default
            raise KeyError(f"Configuration key '{key}' not found in section '{section}'")

        return self._config[section][key]

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get an entire configuration section."""
        return self._config.get(section, {})

    def set(self, section: str, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            section: Configuration section
            key: Configuration key
            value: Value to set
        """
        if section not in self._config:
            self._config[section] = {}
        self._config[section][key] = value

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)
        except OSError as e:
            print(f"⚠️ Failed to save config: {e}", file=sys.stderr)

    def reload(self) -> None:
        """Reload configuration from file."""
        self._config = self._load_config()

    @property
    def server_name(self) -> str:
        """MCP server name."""
        return self.get("mcp_server", "server_name")

    @property
    def dataset_path(self) -> Path:
        """Channel dataset file; CHANNEL_DATASET_PATH overrides the configured default."""
        raw = os.getenv("CHANNEL_DATASET_PATH") or self.get("dataset", "default_path")
        path = Path(raw)
        if not path.is_absolute():
            path = self.config_path.parent / path
        return path

    @property
    def max_field_name_length(self) -> int:
        return self.get("validation", "max_field_name_length", 100)

    @property
    def max_selection_length(self) -> int:
        return self.get("validation", "max_selection_length", 200)

    @property
    def max_prompt_length(self) -> int:
        return self.get("validation", "max_prompt_length", 2000)

    @property
    def gateway_title(self) -> str:
        return self.get("gateway", "title", "YouTube Channel Tools Gateway")


# Global config instance
_config_instance = None


def get_config(config_path: Optional[str] = None) -> Config:
    """Get the global configuration instance."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config(config_path)
    return _config_instance


def reload_config() -> None:
    """Reload the global configuration from file."""
    global _config_instance
    if _config_instance:
        _config_instance.reload()
