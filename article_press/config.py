"""
Configuration management for article-press.

Handles loading and managing configuration from YAML files with sensible defaults.
"""

import logging
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager for article-press."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to custom config file. If None, uses default locations.
        """
        self.config_data = self._load_default_config()

        if config_file:
            self.load_user_config(config_file)
        else:
            self._load_user_config()

    def _load_default_config(self) -> Dict[str, Any]:
        """Load default configuration values."""
        return {
            "default": {
                "output_dir": ".",
                "format": "epub",
                "include_images": True,
                "fallback_title": "Untitled Article",
            },
            "fetcher": {
                "user_agent": "article-press/1.0.0",
                "timeout": None,
            },
            "extractors": {
                "primary": "readability",
                "fallback": "trafilatura",
            },
            "epub": {
                "author": "Unknown Author",
                "language": "en",
            },
        }

    def _load_user_config(self) -> None:
        """Load user configuration from standard locations."""
        possible_paths = [
            Path.home() / ".article-press.yml",
            Path.home() / ".article-press.yaml",
            Path.home() / ".config" / "article-press" / "config.yml",
            Path.home() / ".config" / "article-press" / "config.yaml",
            Path("article-press.yml"),
            Path("article-press.yaml"),
        ]

        for config_path in possible_paths:
            if config_path.exists():
                self.load_user_config(str(config_path))
                break

    def load_user_config(self, config_file: str) -> None:
        """
        Load configuration from a YAML file.

        Args:
            config_file: Path to the configuration file.
        """
        config_path = Path(config_file).expanduser()
        if not config_path.exists():
            return

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                user_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            # Keep the defaults
            logger.warning("Could not load config file %s: %s", config_file, e)
            return

        if isinstance(user_config, dict):
            self._merge_config(user_config)
        elif user_config is not None:
            logger.warning("Ignoring config file %s: top level is not a mapping", config_file)

    def _merge_config(self, user_config: Dict[str, Any]) -> None:
        """
        Merge user configuration with defaults.

        Args:
            user_config: User configuration dictionary.
        """
        def deep_merge(default: Dict, user: Dict) -> Dict:
            """Recursively merge user config into default config."""
            result = default.copy()
            for key, value in user.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = deep_merge(result[key], value)
                else:
                    result[key] = value
            return result

        self.config_data = deep_merge(self.config_data, user_config)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'default.format' or 'fetcher.timeout')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        value = self.config_data

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'epub.author')
            value: Value to set
        """
        keys = key.split('.')
        config = self.config_data

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_default_options(self) -> Dict[str, Any]:
        """Get default options for an export run."""
        return self.get('default', {})

    def get_fetcher_config(self) -> Dict[str, Any]:
        """Get HTTP fetcher settings."""
        return self.get('fetcher', {})

    def get_extractor_config(self) -> Dict[str, Any]:
        """
        Get extractor configuration.

        Returns:
            Dictionary of extractor settings
        """
        return self.get('extractors', {})

    def get_epub_config(self) -> Dict[str, Any]:
        """Get EPUB packaging settings."""
        return self.get('epub', {})


# Global configuration instance
_config = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
