"""Configuration management for gitpeek.

Settings are read, never written: gitpeek only inspects repositories.
Values come from INI-style files, with environment variables on top.
"""

import configparser
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULTS = {
    ('core', 'gitdir'): '.git',
    ('color', 'ui'): 'auto',
}

_FALSE_VALUES = ('never', 'false', 'no', 'off', '0')


class Config:
    """
    Reads gitpeek configuration.

    Sources, from highest to lowest priority:
    1. Environment variables (GITPEEK_<SECTION>_<KEY>)
    2. Repository config (<git-dir>/config)
    3. Global config (~/.gitpeekconfig)
    4. Built-in defaults
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.gitpeekconfig'

    def __init__(self, repo_config_path: Optional[Path] = None,
                 global_config_path: Optional[Path] = None):
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

    @staticmethod
    def _load(path: Path) -> configparser.ConfigParser:
        # Real git config files repeat keys and use tab indentation
        parser = configparser.ConfigParser(strict=False, interpolation=None)
        if path.is_file():
            try:
                parser.read(path)
            except configparser.Error as e:
                logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return parser

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = self._load(self.global_config_path)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = self._load(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Args:
            section: Config section (e.g., 'core', 'color')
            key: Config key (e.g., 'gitdir', 'ui')
            fallback: Value used when no source defines the key; defaults
                to the built-in default

        Returns:
            Configuration value or fallback
        """
        env_key = f"GITPEEK_{section.upper()}_{key.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        if fallback is not None:
            return fallback
        return DEFAULTS.get((section, key))

    @property
    def git_dir_name(self) -> str:
        """Name of the repository directory looked for during discovery."""
        return self.get('core', 'gitdir')

    @property
    def use_color(self) -> bool:
        value = self.get('color', 'ui')
        return value.strip().lower() not in _FALSE_VALUES


def get_config(repo=None) -> Config:
    """
    Get a Config instance.

    Args:
        repo: Repository instance, or None for global-only config

    Returns:
        Config instance
    """
    if repo:
        return Config(repo.config_file)
    return Config()
