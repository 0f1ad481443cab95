"""Unit tests for PluginManager."""

from pathlib import Path
from typing import List
from unittest.mock import patch

import pytest

import plugins.puppet
from plugins import LanguagePlugin, PluginManager, create_plugin_manager
from plugins.puppet import PuppetPlugin
from pupdoc.models.parse_result import ParseResult
from pupdoc.models.statement import ResourceTypeStatement

PUPPET_PLUGIN_DIR = Path(plugins.puppet.__file__).parent


class MockRubyPlugin(LanguagePlugin):
    """Mock plugin standing in for a Ruby resource type parser."""

    @property
    def language_name(self) -> str:
        return "ruby"

    @property
    def file_extensions(self) -> List[str]:
        return [".rb"]

    def parse_file(self, file_path: str, content: str) -> ParseResult:
        statement = ResourceTypeStatement(name="database", file=file_path, line=1, docstring="An example database type.")
        return ParseResult(statements=(statement,))


class TestPluginManager:
    """Test plugin registration and lookup."""

    @pytest.fixture
    def manager(self):
        manager = PluginManager()
        manager.register_plugin(PuppetPlugin())
        manager.register_plugin(MockRubyPlugin())
        return manager

    def test_lookup_by_extension(self, manager):
        """Test that files are routed by extension."""
        assert manager.get_plugin_for_file("manifests/init.pp").language_name == "puppet"
        assert manager.get_plugin_for_file("lib/puppet/type/database.rb").language_name == "ruby"
        assert manager.get_plugin_for_file("README.md") is None

    def test_lookup_by_language(self, manager):
        """Test lookup by language name."""
        assert isinstance(manager.get_plugin("puppet"), PuppetPlugin)
        assert manager.get_plugin("python") is None

    def test_lists(self, manager):
        """Test listing languages and extensions."""
        assert sorted(manager.list_supported_languages()) == ["puppet", "ruby"]
        assert sorted(manager.list_supported_extensions()) == [".pp", ".rb"]

    def test_parse_file_routes_to_plugin(self, manager):
        """Test parsing through the manager."""
        result = manager.parse_file("manifests/init.pp", "# Doc\nclass init {\n}\n")

        assert result.statements[0].name == "init"
        ruby_result = manager.parse_file("lib/puppet/type/database.rb", "")
        assert ruby_result.statements[0].kind == "resource_type"
        assert manager.parse_file("README.md", "# Title") is None

    def test_unregister_plugin(self, manager):
        """Test removing a plugin and its extensions."""
        assert manager.unregister_plugin("ruby") is True
        assert manager.get_plugin_for_file("x.rb") is None
        assert manager.unregister_plugin("ruby") is False

    def test_register_twice_overwrites(self, manager, caplog):
        """Test re-registering a language."""
        replacement = PuppetPlugin()
        manager.register_plugin(replacement)

        assert manager.get_plugin("puppet") is replacement
        assert "already registered" in caplog.text


class TestPluginConfig:
    """Test YAML configuration loading."""

    def test_load_puppet_config(self):
        """Test loading the bundled Puppet plugin configuration."""
        config = PluginManager().load_plugin_config(PUPPET_PLUGIN_DIR)

        assert config["name"] == "puppet"
        assert config["file_extensions"] == [".pp"]
        assert config["plans"]["minimum_runtime_version"] == "5.0.0"

    def test_config_is_cached(self):
        """Test that configurations are loaded once."""
        manager = PluginManager()

        assert manager.load_plugin_config(PUPPET_PLUGIN_DIR) is manager.load_plugin_config(PUPPET_PLUGIN_DIR)

    def test_missing_config(self, tmp_path):
        """Test a directory without config.yaml."""
        with pytest.raises(FileNotFoundError):
            PluginManager().load_plugin_config(tmp_path)

    def test_missing_required_field(self, tmp_path):
        """Test a configuration without file extensions."""
        (tmp_path / "config.yaml").write_text("name: broken\nversion: '1.0'\n")

        with pytest.raises(ValueError, match="file_extensions"):
            PluginManager().load_plugin_config(tmp_path)


class TestCreatePluginManager:
    """Test building the default plugin manager."""

    def test_registers_puppet_plugin(self, settings):
        """Test that manifests are routed to a Puppet plugin built from the settings."""
        with patch("plugins.manager.setup_logging"):
            manager = create_plugin_manager(settings)

        plugin = manager.get_plugin_for_file("manifests/init.pp")
        assert isinstance(plugin, PuppetPlugin)
        assert plugin.settings.minimum_plan_version == settings.minimum_plan_version
        assert manager.list_supported_languages() == ["puppet"]

    def test_configures_logging_at_settings_level(self, settings):
        """Test that logging is set up with the configured log level."""
        with patch("plugins.manager.setup_logging") as mock_setup:
            create_plugin_manager(settings)

        mock_setup.assert_called_once_with("DEBUG")

    def test_logging_setup_can_be_skipped(self, settings):
        """Test leaving the host's logging configuration alone."""
        with patch("plugins.manager.setup_logging") as mock_setup:
            create_plugin_manager(settings, configure_logging=False)

        mock_setup.assert_not_called()
