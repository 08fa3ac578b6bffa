"""Tests for convobot.commands.help_command."""

import pytest

from convobot.commands.ai_command import AICommand
from convobot.commands.help_command import HelpCommand
from convobot.commands.sports_command import SportsCommand
from convobot.commands.yt_command import YoutubeCommand
from convobot.enums import ActionType
from tests.conftest import mock_context


@pytest.fixture
def help_command(command_mock_bot):
    cmd = HelpCommand(command_mock_bot)
    command_mock_bot.command_manager.commands = {
        'commands': cmd,
        'sports': SportsCommand(command_mock_bot),
        'yt': YoutubeCommand(command_mock_bot),
        'ai': AICommand(command_mock_bot),
    }
    return cmd


class TestHelpCommand:
    """Tests for HelpCommand."""

    def test_listing(self, help_command):
        assert help_command.build_listing() == "\n".join([
            "Available Commands:",
            "🤖 /ai [prompt] - Ask the AI for any information or assistance",
            "🎥 /yt [search term] - Search YouTube for videos",
            "🏀 /sports [league] - Get live scores, upcoming games, and odds (e.g., /sports nba)",
            "ℹ️ /commands - List all available commands",
            "",
            "Valid sports: nfl, nba, nhl, mlb",
            "",
            "Examples:",
            "/ai What's the capital of France?",
            "/yt funny cat videos",
            "/sports nfl",
        ])

    def test_listing_omits_unloaded_commands(self, help_command, command_mock_bot):
        del command_mock_bot.command_manager.commands['yt']
        assert "/yt" not in help_command.build_listing()

    @pytest.mark.asyncio
    async def test_execute_sends_listing_and_sets_cooldown(self, help_command, command_mock_bot, sent_messages):
        assert await help_command.execute(mock_context()) is True
        assert sent_messages()[0].startswith("Available Commands:")
        assert command_mock_bot.state_manager.check_cooldown("1001", ActionType.COMMANDS_LIST) is True

    @pytest.mark.asyncio
    async def test_on_cooldown_silent(self, help_command, command_mock_bot, sent_messages):
        command_mock_bot.state_manager.set_cooldown("1001", ActionType.COMMANDS_LIST)
        assert await help_command.execute(mock_context()) is False
        assert sent_messages() == []
