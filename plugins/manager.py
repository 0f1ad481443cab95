"""
Plugin Manager for language-specific documentation parsers.

This module manages plugin registration, configuration loading, and
selection of the parser for a file based on its extension.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from plugins.base import LanguagePlugin
from pupdoc.config import Settings
from pupdoc.config import settings as default_settings
from pupdoc.models.parse_result import ParseResult
from pupdoc.utils.logging import setup_logging

logger = logging.getLogger(__name__)

REQUIRED_CONFIG_FIELDS = ('name', 'version', 'file_extensions')


class PluginManager:
    """Manages language plugin registration and selection."""

    def __init__(self):
        """Initialize the plugin manager."""
        self._plugins: Dict[str, LanguagePlugin] = {}
        self._extension_map: Dict[str, str] = {}
        self._config_cache: Dict[str, Dict] = {}

    def register_plugin(self, plugin: LanguagePlugin) -> None:
        """
        Register a language plugin.

        Args:
            plugin: LanguagePlugin instance to register
        """
        language_name = plugin.language_name

        if language_name in self._plugins:
            logger.warning(f"Plugin for language '{language_name}' already registered, overwriting")

        self._plugins[language_name] = plugin

        for ext in plugin.file_extensions:
            if ext in self._extension_map and self._extension_map[ext] != language_name:
                logger.warning(
                    f"Extension '{ext}' already mapped to '{self._extension_map[ext]}', "
                    f"overwriting with '{language_name}'"
                )
            self._extension_map[ext] = language_name

        logger.info(
            f"Registered plugin for language '{language_name}' "
            f"with extensions: {plugin.file_extensions}"
        )

    def unregister_plugin(self, language_name: str) -> bool:
        """
        Unregister a plugin.

        Args:
            language_name: Name of the language plugin to unregister

        Returns:
            True if plugin was unregistered, False if not found
        """
        plugin = self._plugins.pop(language_name, None)
        if plugin is None:
            return False

        for ext in plugin.file_extensions:
            if self._extension_map.get(ext) == language_name:
                del self._extension_map[ext]

        logger.info(f"Unregistered plugin for language '{language_name}'")
        return True

    def get_plugin(self, language_name: str) -> Optional[LanguagePlugin]:
        """Get plugin by language name."""
        return self._plugins.get(language_name)

    def get_plugin_for_file(self, file_path: str) -> Optional[LanguagePlugin]:
        """
        Get appropriate plugin based on file extension.

        Args:
            file_path: Path to the file

        Returns:
            LanguagePlugin instance if found, None otherwise
        """
        ext = Path(file_path).suffix
        language = self._extension_map.get(ext)

        if language:
            return self._plugins.get(language)

        logger.debug(f"No plugin found for file extension '{ext}' (file: {file_path})")
        return None

    def parse_file(self, file_path: str, content: str) -> Optional[ParseResult]:
        """
        Parse a file with the plugin registered for its extension.

        Args:
            file_path: Path to the file
            content: File content

        Returns:
            ParseResult, or None if no plugin handles the file
        """
        plugin = self.get_plugin_for_file(file_path)
        if plugin is None:
            return None
        return plugin.parse_file(file_path, content)

    def list_supported_languages(self) -> List[str]:
        return list(self._plugins.keys())

    def list_supported_extensions(self) -> List[str]:
        return list(self._extension_map.keys())

    def load_plugin_config(self, plugin_dir: Path) -> Dict:
        """
        Load plugin configuration from YAML file.

        Args:
            plugin_dir: Directory containing the plugin and config.yaml

        Returns:
            Dictionary containing plugin configuration

        Raises:
            FileNotFoundError: If config.yaml is not found
            ValueError: If a required field is missing
            yaml.YAMLError: If config.yaml is malformed
        """
        config_path = plugin_dir / "config.yaml"

        cache_key = str(config_path)
        if cache_key in self._config_cache:
            return self._config_cache[cache_key]

        if not config_path.exists():
            raise FileNotFoundError(f"Plugin configuration not found: {config_path}")

        try:
            with open(config_path, 'r') as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse plugin configuration {config_path}: {e}")
            raise

        for field in REQUIRED_CONFIG_FIELDS:
            if field not in config:
                raise ValueError(f"Missing required field '{field}' in {config_path}")

        self._config_cache[cache_key] = config
        logger.info(f"Loaded plugin configuration from {config_path}")
        return config


def create_plugin_manager(settings: Optional[Settings] = None, configure_logging: bool = True) -> PluginManager:
    """
    Build a plugin manager with the bundled language plugins registered.

    Args:
        settings: Extractor settings; the module-level settings when None
        configure_logging: Install the JSON log handler at settings.log_level

    Returns:
        PluginManager ready to parse files
    """
    from plugins.puppet.plugin import PuppetPlugin

    settings = settings or default_settings
    if configure_logging:
        setup_logging(settings.log_level)

    manager = PluginManager()
    manager.register_plugin(PuppetPlugin(settings=settings))
    return manager
