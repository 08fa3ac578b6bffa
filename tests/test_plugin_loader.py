"""Tests for convobot.plugin_loader."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from convobot.commands.base_command import BaseCommand
from convobot.plugin_loader import PluginLoader


@pytest.fixture
def loader_bot(mock_logger, minimal_config):
    """Mock bot for PluginLoader tests."""
    bot = MagicMock()
    bot.logger = mock_logger
    bot.config = minimal_config
    bot.command_manager = MagicMock()
    bot.command_manager.send_response = AsyncMock(return_value=True)
    return bot


class TestDiscover:
    """Tests for plugin discovery."""

    def test_discover_plugins_finds_command_files(self, loader_bot):
        plugins = PluginLoader(loader_bot).discover_plugins()
        assert set(plugins) == {"ai_command", "help_command", "sports_command", "yt_command"}

    def test_discover_plugins_excludes_base_and_init(self, loader_bot):
        plugins = PluginLoader(loader_bot).discover_plugins()
        assert "__init__" not in plugins
        assert "base_command" not in plugins

    def test_missing_directory(self, loader_bot, tmp_path):
        loader = PluginLoader(loader_bot, commands_dir=str(tmp_path / "nonexistent"))
        assert loader.discover_plugins() == []
        loader_bot.logger.error.assert_called()


class TestValidatePlugin:
    """Tests for plugin class validation."""

    def test_validate_missing_execute(self, loader_bot):
        class NoExecute:
            name = "test"
            keywords = ["test"]

        errors = PluginLoader(loader_bot)._validate_plugin(NoExecute)
        assert any("execute" in e.lower() for e in errors)

    def test_validate_sync_execute(self, loader_bot):
        class SyncExecute:
            name = "test"
            keywords = ["test"]

            def execute(self, ctx):
                return True

        errors = PluginLoader(loader_bot)._validate_plugin(SyncExecute)
        assert any("async" in e.lower() for e in errors)

    def test_validate_missing_name(self, loader_bot):
        class Nameless:
            name = ""
            keywords = []

            async def execute(self, ctx):
                return True

        errors = PluginLoader(loader_bot)._validate_plugin(Nameless)
        assert any("name" in e for e in errors)

    def test_validate_valid_class(self, loader_bot):
        class ValidCommand:
            name = "test"
            keywords = ["test"]

            async def execute(self, ctx):
                return True

        assert PluginLoader(loader_bot)._validate_plugin(ValidCommand) == []


class TestLoadPlugin:
    """Tests for loading individual plugins."""

    def test_load_ai_command(self, loader_bot):
        plugin = PluginLoader(loader_bot).load_plugin("ai_command")
        assert isinstance(plugin, BaseCommand)
        assert plugin.name == "ai"

    def test_load_nonexistent_returns_none(self, loader_bot):
        loader = PluginLoader(loader_bot)
        assert loader.load_plugin("totally_nonexistent_command") is None
        assert "totally_nonexistent_command" in loader.get_failed_plugins()

    def test_module_without_command_class(self, loader_bot):
        loader = PluginLoader(loader_bot)
        assert loader.load_plugin("base_command") is None
        assert "base_command" in loader.get_failed_plugins()


class TestLoadAll:
    """Tests for load_all_plugins() and lookups."""

    def test_loads_all_commands(self, loader_bot):
        loader = PluginLoader(loader_bot)
        plugins = loader.load_all_plugins()
        assert set(plugins) == {"ai", "yt", "sports", "commands"}

    def test_keyword_lookup_case_insensitive(self, loader_bot):
        loader = PluginLoader(loader_bot)
        loader.load_all_plugins()
        assert loader.get_plugin_by_keyword("YT").name == "yt"
        assert loader.get_plugin_by_keyword("nonexistent") is None
        assert loader.get_plugin_by_name("sports").name == "sports"

    def test_disabled_plugin_skipped(self, loader_bot):
        loader_bot.config.add_section("YT_Command")
        loader_bot.config.set("YT_Command", "enabled", "false")
        loader = PluginLoader(loader_bot)
        plugins = loader.load_all_plugins()
        assert "yt" not in plugins
        assert loader.get_plugin_by_keyword("yt") is None
        assert loader.get_disabled_plugins() == ["yt"]

    def test_get_failed_plugins_returns_copy(self, loader_bot):
        loader = PluginLoader(loader_bot)
        loader.load_plugin("nonexistent_command")
        failed = loader.get_failed_plugins()
        failed.clear()
        assert len(loader.get_failed_plugins()) > 0
