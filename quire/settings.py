#!/usr/bin/env python3
"""
Settings loader for Quire static site generator.
Supports configuration from quire.yaml, quire.yml, or quire.json files.
"""

import os
import json
import logging
from dataclasses import dataclass, fields
from typing import Dict, Any, Optional

import yaml

from .errors import ConfigError

DEFAULT_FOOTER = (
    '<a href="https://creativecommons.org/licenses/by-nc-sa/4.0/">CC-BY_NC-SA</a>'
    ' | Site generated with Quire'
)

logger = logging.getLogger('Quire.settings')


@dataclass(frozen=True)
class SiteConfig:
    """Typed, read-only view of the site configuration."""

    name: str = 'Quire Site'
    tagline: str = 'A website generated with Quire'
    url: str = 'https://example.com'
    footer: str = DEFAULT_FOOTER
    pagination: int = 10
    list_title: str = 'Posts'
    tags_title: str = 'Tags'
    content_path: str = 'content'
    templates_path: str = 'templates'
    static_path: str = 'static'
    media_path: str = 'content/media'
    site_path: str = 'site'

    @classmethod
    def from_mapping(cls, data: Optional[Dict[str, Any]]) -> 'SiteConfig':
        """
        Build a config from a loaded mapping, falling back to defaults.

        Args:
            data: Mapping of configuration keys, may be None or partial

        Returns:
            SiteConfig with every field populated

        Raises:
            ConfigError: If a known key holds a value of the wrong type
        """
        data = data or {}
        known = {f.name: f for f in fields(cls)}
        values = {}
        for key, value in data.items():
            field_def = known.get(key)
            if field_def is None:
                logger.debug(f"Ignoring unknown configuration key: {key}")
                continue
            expected = int if key == 'pagination' else str
            # bool is an int subclass, reject it explicitly
            if isinstance(value, bool) or not isinstance(value, expected):
                raise ConfigError(
                    f"Configuration key '{key}' must be {expected.__name__}, "
                    f"got {type(value).__name__}: {value!r}"
                )
            values[key] = value
        return cls(**values)


class SiteSettings:
    """Load and manage Quire configuration settings."""

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['quire.yaml', 'quire.yml', 'quire.json']

    def __init__(self, config_dir: str = None, config_file: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
            config_file: Explicit config file; must exist when given.
        """
        self.config_dir = config_dir or os.getcwd()
        self.config_file = config_file
        self.config_file_path = None

    def load_settings(self) -> SiteConfig:
        """
        Load settings from configuration file if it exists.

        Returns:
            SiteConfig built from the file merged over the defaults

        Raises:
            ConfigError: If the file is missing (explicit path only),
                unreadable, or malformed
        """
        if self.config_file:
            config_file = self.config_file
            if not os.path.isabs(config_file) and not os.path.exists(config_file):
                config_file = os.path.join(self.config_dir, config_file)
            if not os.path.exists(config_file):
                raise ConfigError(f"Configuration file not found: {self.config_file}")
        else:
            config_file = self._find_config_file()

        if not config_file:
            logger.debug("No configuration file found, using defaults")
            return SiteConfig()

        self.config_file_path = config_file
        loaded_settings = self._load_config_file(config_file)
        logger.debug(f"Loaded configuration from: {os.path.relpath(config_file)}")
        return SiteConfig.from_mapping(loaded_settings)

    def _find_config_file(self) -> Optional[str]:
        """
        Find the first available configuration file.

        Returns:
            Path to config file or None if not found
        """
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        if file_ext not in ['.yml', '.yaml', '.json']:
            raise ConfigError(f"Unsupported config file format: {file_ext}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except PermissionError:
            raise ConfigError(f"Permission denied reading configuration file: {config_path}")
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {config_path}: {e}")
        except UnicodeDecodeError as e:
            raise ConfigError(f"Error reading configuration file {config_path}: {e}")
        except (yaml.YAMLError, ValueError) as e:
            # Impossible timestamps such as 2024-02-30 surface as ValueError
            raise ConfigError(f"Invalid YAML in configuration file {config_path}: {e}")
        except (IOError, OSError) as e:
            raise ConfigError(f"Error reading configuration file {config_path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file must contain a mapping: {config_path}")
        return data
