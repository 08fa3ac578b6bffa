#!/usr/bin/env python3
"""
Pytest fixtures for convo-bot tests
"""

import configparser
from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest

from convobot.clients.sports_mappings import LEAGUE_CATALOG
from convobot.models import ChatMessage, CommandContext
from convobot.state_manager import UserStateManager


def mock_message(
    content: str = "/commands",
    sender_id: str = "1001",
    sender_name: str = "TestUser",
    **kwargs: Any,
) -> ChatMessage:
    """Factory for creating ChatMessage instances in tests."""
    return ChatMessage(content=content, sender_id=sender_id, sender_name=sender_name, **kwargs)


def mock_context(
    args: str = "",
    user_id: str = "1001",
    display_name: str = "TestUser",
    message: Optional[ChatMessage] = None,
) -> CommandContext:
    """Factory for creating CommandContext instances in tests."""
    return CommandContext(user_id=user_id, display_name=display_name, args=args, message=message)


@pytest.fixture
def minimal_config():
    """Minimal ConfigParser for command tests (Bot, Rate_Limit, Cooldowns)."""
    config = configparser.ConfigParser()
    config.add_section("Bot")
    config.set("Bot", "bot_name", "TestBot")
    config.set("Bot", "command_prefix", "/")
    config.set("Bot", "trusted_domain", "hackforums.net")
    config.add_section("Rate_Limit")
    config.set("Rate_Limit", "max_requests", "5")
    config.set("Rate_Limit", "period_seconds", "60")
    config.add_section("Cooldowns")
    config.set("Cooldowns", "general", "10")
    config.set("Cooldowns", "video_search", "15")
    config.set("Cooldowns", "commands_list", "5")
    config.set("Cooldowns", "sports", "20")
    return config


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing."""
    logger = Mock()
    logger.info = Mock()
    logger.debug = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    return logger


@pytest.fixture
def state_manager(mock_logger):
    """Real UserStateManager with default limits."""
    return UserStateManager(max_requests=5, period_seconds=60, logger=mock_logger)


@pytest.fixture
def command_mock_bot(mock_logger, minimal_config, state_manager):
    """Lightweight mock bot for command tests. Real state, mocked API clients."""
    bot = MagicMock()
    bot.logger = mock_logger
    bot.config = minimal_config
    bot.state_manager = state_manager
    bot.gemini_client = MagicMock()
    bot.gemini_client.generate = AsyncMock(return_value="Paris is the capital of France.")
    bot.youtube_client = MagicMock()
    bot.youtube_client.search = AsyncMock(return_value="https://www.youtube.com/watch?v=abc123")
    bot.sports_aggregator = MagicMock()
    bot.sports_aggregator.leagues = dict(LEAGUE_CATALOG)
    bot.sports_aggregator.fetch_league_data = AsyncMock(return_value="🏆 NFL Games:")
    bot.command_manager = MagicMock()
    bot.command_manager.send_response = AsyncMock(return_value=True)
    return bot


@pytest.fixture
def sent_messages(command_mock_bot):
    """Return a function listing the texts passed to send_response."""
    def _sent():
        return [c.args[0] for c in command_mock_bot.command_manager.send_response.call_args_list]
    return _sent
