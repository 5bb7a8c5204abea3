"""Configuration management for Cairn.

Repository settings live in .cairn/config, user-wide settings in
~/.cairnconfig. Both are INI files.
"""

import os
import configparser
from pathlib import Path
from typing import Optional, Dict

from cairn.errors import InvalidConfig

DEFAULTS = {
    ('core', 'compression'): '-1',
    ('core', 'ignorefile'): '.cairnignore',
    ('init', 'defaultbranch'): 'main',
}


class Config:
    """
    Manages Cairn configuration files.

    Lookup order (highest to lowest):
    1. Environment variables (CAIRN_<SECTION>_<KEY>)
    2. Repository config
    3. Global config
    4. Built-in defaults
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.cairnconfig'

    def __init__(self, repo_config_path: Optional[Path] = None, global_config_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if in a repo
            global_config_path: Override for the global config location
        """
        self.repo_config_path = repo_config_path
        self.global_config_path = global_config_path or self.GLOBAL_CONFIG_PATH
        self._global_config = None
        self._repo_config = None

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = configparser.ConfigParser()
            if self.global_config_path.exists():
                self._global_config.read(self.global_config_path)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = configparser.ConfigParser()
            if self.repo_config_path.exists():
                self._repo_config.read(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Args:
            section: Config section (e.g., 'core')
            key: Config key (e.g., 'compression')
            fallback: Value used when nothing is configured; defaults to the
                built-in default for the key

        Returns:
            Configuration value or fallback
        """
        env_value = os.environ.get(f"CAIRN_{section.upper()}_{key.upper()}")
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        if fallback is None:
            return DEFAULTS.get((section, key))
        return fallback

    def get_int(self, section: str, key: str, fallback: int = 0) -> int:
        value = self.get(section, key)
        if value is None:
            return fallback
        try:
            return int(value)
        except ValueError:
            raise InvalidConfig(f"{section}.{key} must be an integer, got {value!r}")

    def _writable(self, global_config: bool):
        if global_config:
            return self.global_config, self.global_config_path
        if not self.repo_config_path:
            raise ValueError("No repository config path available")
        return self.repo_config, self.repo_config_path

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Set a configuration value.

        Args:
            section: Config section
            key: Config key
            value: Value to set
            global_config: If True, write to global config; otherwise repo config
        """
        config, config_path = self._writable(global_config)

        if not config.has_section(section):
            config.add_section(section)
        config.set(section, key, value)

        with open(config_path, 'w') as f:
            config.write(f)

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Remove a configuration value.

        Returns:
            True if value was removed, False if it didn't exist
        """
        config, config_path = self._writable(global_config)

        if not config.has_option(section, key):
            return False

        config.remove_option(section, key)
        if not config.options(section):
            config.remove_section(section)

        with open(config_path, 'w') as f:
            config.write(f)
        return True

    def list_all(self) -> Dict[str, Dict[str, str]]:
        """
        List all configured values, repository values overriding global ones.

        Returns:
            Dict of sections to key-value dicts
        """
        result: Dict[str, Dict[str, str]] = {}
        sources = [self.global_config]
        if self.repo_config:
            sources.append(self.repo_config)

        for config in sources:
            for section in config.sections():
                result.setdefault(section, {}).update(config.items(section))
        return result
