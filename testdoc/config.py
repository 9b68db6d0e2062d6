"""
Configuration for testdoc.

This module uses Pydantic for validation and supports:
- Loading from testdoc.yaml
- Building from a plain dictionary
- Falling back to defaults when no file is found
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from .rendering import OutputFormat
from .text import DEFAULT_CLASS_PREFIX

# Default config file name
DEFAULT_CONFIG_FILE = "testdoc.yaml"


class DocumentConfig(BaseModel):
    """Authoring and rendering settings."""

    # Rendering
    tab_size: int = Field(default=2, ge=0)
    default_format: OutputFormat = OutputFormat.HTML
    class_prefix: str = DEFAULT_CLASS_PREFIX

    # Authoring
    strict: bool = False  # Raise on elements created through disposed contexts

    @classmethod
    def from_yaml(cls, path: Path | str) -> "DocumentConfig":
        """Load configuration from YAML file.

        Args:
            path: Path to the YAML config file

        Returns:
            DocumentConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DocumentConfig":
        """Create config from dictionary."""
        return cls.model_validate(data)

    @classmethod
    def load(
        cls,
        config_path: Path | str | None = None,
        search_paths: list[Path | str] | None = None,
    ) -> "DocumentConfig":
        """Load configuration with fallback search.

        Args:
            config_path: Explicit path to config file
            search_paths: List of directories to search for testdoc.yaml

        Returns:
            DocumentConfig instance (defaults if no config found)
        """
        if config_path:
            return cls.from_yaml(config_path)

        if search_paths is None:
            search_paths = [Path.cwd()]

        for search_dir in search_paths:
            config_file = Path(search_dir) / DEFAULT_CONFIG_FILE
            if config_file.exists():
                return cls.from_yaml(config_file)

        return cls()


def load_config(config_path: Path | str | None = None) -> DocumentConfig:
    """Convenience function to load configuration."""
    return DocumentConfig.load(config_path)
