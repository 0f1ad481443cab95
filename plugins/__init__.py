"""
Language plugin architecture for documentation extraction.

This package provides the plugin system for language-specific parsers,
including the base plugin interface and plugin manager.
"""

from plugins.base import LanguagePlugin
from plugins.manager import PluginManager, create_plugin_manager

__all__ = ['LanguagePlugin', 'PluginManager', 'create_plugin_manager']
