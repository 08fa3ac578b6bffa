"""Tests for convobot.commands.ai_command."""

import pytest

from convobot.clients.base_client import ExternalServiceError
from convobot.commands.ai_command import AICommand
from convobot.enums import ActionType
from convobot.security_utils import LINKS_MESSAGE
from tests.conftest import mock_context

LINK = "(https://hackforums.net/member.php?action=profile&uid=1001)"


class TestAICommand:
    """Tests for AICommand."""

    @pytest.mark.asyncio
    async def test_reply_and_cooldown(self, command_mock_bot, sent_messages):
        cmd = AICommand(command_mock_bot)
        assert await cmd.execute(mock_context("What's the capital of France?")) is True
        assert sent_messages() == [f"AI Response for {LINK}: Paris is the capital of France."]
        assert command_mock_bot.state_manager.check_cooldown("1001", ActionType.GENERAL) is True

    @pytest.mark.asyncio
    async def test_prompt_wrapped_with_instructions(self, command_mock_bot):
        cmd = AICommand(command_mock_bot)
        await cmd.execute(mock_context("hello"))
        prompt = command_mock_bot.gemini_client.generate.call_args.args[0]
        assert "under 100 words" in prompt
        assert prompt.endswith('Here\'s the input: "hello".')

    @pytest.mark.asyncio
    async def test_prompt_of_1501_chars_dropped(self, command_mock_bot, sent_messages):
        cmd = AICommand(command_mock_bot)
        assert await cmd.execute(mock_context("a" * 1501)) is False
        assert sent_messages() == []
        command_mock_bot.gemini_client.generate.assert_not_called()
        assert command_mock_bot.state_manager.check_cooldown("1001", ActionType.GENERAL) is False

    @pytest.mark.asyncio
    async def test_length_counted_before_control_chars_removed(self, command_mock_bot, sent_messages):
        cmd = AICommand(command_mock_bot)
        assert await cmd.execute(mock_context("a" * 1500 + "\x07")) is False
        assert sent_messages() == []
        command_mock_bot.gemini_client.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_prompt_of_1500_chars_accepted(self, command_mock_bot):
        cmd = AICommand(command_mock_bot)
        assert await cmd.execute(mock_context("a" * 1500)) is True

    @pytest.mark.asyncio
    async def test_empty_prompt_dropped(self, command_mock_bot, sent_messages):
        cmd = AICommand(command_mock_bot)
        assert await cmd.execute(mock_context("   ")) is False
        assert sent_messages() == []

    @pytest.mark.asyncio
    async def test_on_cooldown_silent(self, command_mock_bot, sent_messages):
        command_mock_bot.state_manager.set_cooldown("1001", ActionType.GENERAL)
        cmd = AICommand(command_mock_bot)
        assert await cmd.execute(mock_context("hi")) is False
        assert sent_messages() == []
        command_mock_bot.gemini_client.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_generation(self, command_mock_bot, sent_messages):
        command_mock_bot.gemini_client.generate.return_value = ""
        cmd = AICommand(command_mock_bot)
        assert await cmd.execute(mock_context("hi")) is True
        assert sent_messages() == [f"AI Response for {LINK}: No response generated."]
        assert command_mock_bot.state_manager.check_cooldown("1001", ActionType.GENERAL) is True

    @pytest.mark.asyncio
    async def test_client_error(self, command_mock_bot, sent_messages):
        command_mock_bot.gemini_client.generate.side_effect = ExternalServiceError("timeout")
        cmd = AICommand(command_mock_bot)
        assert await cmd.execute(mock_context("hi")) is False
        assert sent_messages() == [f"AI Response for {LINK}: Error generating response."]
        assert command_mock_bot.state_manager.check_cooldown("1001", ActionType.GENERAL) is False

    @pytest.mark.asyncio
    async def test_reply_is_sanitized(self, command_mock_bot, sent_messages):
        command_mock_bot.gemini_client.generate.return_value = "Visit https://evil.example.com now"
        cmd = AICommand(command_mock_bot)
        await cmd.execute(mock_context("where?"))
        assert sent_messages() == [f"AI Response for {LINK}: {LINKS_MESSAGE}"]

    @pytest.mark.asyncio
    async def test_configured_limits(self, command_mock_bot):
        command_mock_bot.config.add_section("AI_Command")
        command_mock_bot.config.set("AI_Command", "max_prompt_length", "10")
        command_mock_bot.config.set("AI_Command", "max_words", "50")
        cmd = AICommand(command_mock_bot)
        assert await cmd.execute(mock_context("a" * 11)) is False
        await cmd.execute(mock_context("short"))
        assert "under 50 words" in command_mock_bot.gemini_client.generate.call_args.args[0]
