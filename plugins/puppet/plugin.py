"""
Puppet Language Plugin for documentation extraction.

This plugin extracts classes, defined types, functions, plans and type
aliases from Puppet manifests together with their comment blocks.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from plugins.base import LanguagePlugin
from pupdoc.config import RuntimeSettings, Settings
from pupdoc.config import runtime_settings as default_runtime_settings
from pupdoc.config import settings as default_settings
from pupdoc.models.parse_result import ParseResult
from pupdoc.parsers.parser import PuppetParser
from pupdoc.utils.logging import get_logger

logger = logging.getLogger(__name__)


class PuppetPlugin(LanguagePlugin):
    """Puppet manifest documentation plugin."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        settings: Optional[Settings] = None,
        runtime: Optional[RuntimeSettings] = None,
    ):
        """
        Initialize the Puppet plugin.

        Args:
            config_path: Path to config.yaml file. If None, uses default location.
            settings: Base extractor settings; values in config.yaml override them
            runtime: Hosting runtime settings
        """
        if config_path is None:
            config_path = Path(__file__).parent / "config.yaml"

        with open(config_path, 'r') as f:
            self._config: Dict[str, Any] = yaml.safe_load(f) or {}

        self._runtime = runtime or default_runtime_settings
        self._settings = self._merge_settings(settings or default_settings)
        self._tasks = bool(self._config.get('grammar', {}).get('tasks', True))

        logger.info("Puppet plugin initialized successfully")

    def _merge_settings(self, base: Settings) -> Settings:
        plans = self._config.get('plans', {})
        docstrings = self._config.get('docstrings', {})
        overrides: Dict[str, Any] = {}
        if 'minimum_runtime_version' in plans:
            overrides['minimum_plan_version'] = str(plans['minimum_runtime_version'])
        if 'path_pattern' in plans:
            overrides['plans_path_pattern'] = plans['path_pattern']
        if 'max_blank_lines' in docstrings:
            overrides['max_blank_lines'] = int(docstrings['max_blank_lines'])
        return base.model_copy(update=overrides)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "puppet"

    @property
    def file_extensions(self) -> List[str]:
        """Return supported file extensions."""
        return self._config.get('file_extensions', ['.pp'])

    @property
    def settings(self) -> Settings:
        return self._settings

    def parse_file(self, file_path: str, content: str) -> ParseResult:
        """
        Parse a Puppet manifest.

        Args:
            file_path: Path to the file being parsed, relative to the module root
            content: File content as string

        Returns:
            ParseResult with the documented statements or the syntax error
        """
        parser = PuppetParser(
            content,
            file_path,
            settings=self._settings,
            runtime=self._runtime,
            logger=get_logger(__name__, file=file_path, language=self.language_name),
            tasks=self._tasks,
        )
        result = parser.parse().result

        logger.debug(f"Parsed {file_path}: {len(result.statements)} statements")
        return result
