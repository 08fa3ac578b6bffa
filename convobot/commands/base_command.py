#!/usr/bin/env python3
"""
Base command class for all Convo Bot commands
Provides common functionality and interface for command implementations
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..enums import ActionType
from ..models import CommandContext
from ..utils import DEFAULT_PROFILE_URL_TEMPLATE, generate_profile_link


class BaseCommand(ABC):
    """Base class for all bot commands - Plugin Interface.

    This class defines the interface that all commands must implement. It provides
    common functionality for configuration loading, cooldown checks against the
    shared user state, and reply handling.
    """

    # Plugin metadata - to be overridden by subclasses
    name: str = ""
    keywords: List[str] = []  # All trigger words for this command (including name and aliases)
    description: str = ""
    emoji: str = ""
    category: str = "general"
    # Cooldown bucket checked and set by the command; None means no cooldown
    action_type: Optional[ActionType] = None

    # Documentation fields - shown by the commands listing
    usage: str = ""  # Usage syntax, e.g., "/sports [league]"
    examples: List[str] = []  # Example invocations, e.g., ["/sports nfl"]

    def __init__(self, bot):
        self.bot = bot
        self.logger = bot.logger
        self.enabled = self.get_config_value(
            self._derive_config_section_name(), 'enabled', fallback=True, value_type='bool'
        )

    def get_config_value(self, section: str, key: str, fallback: Any = None, value_type: str = 'str') -> Any:
        """Get a typed config value, or fallback when the section or key is missing.

        Args:
            section: Config section name.
            key: Config key name.
            fallback: Default value if not found or not convertible.
            value_type: Type of value ('str', 'bool', 'int', 'float', 'list').

        Returns:
            Any: Config value of appropriate type, or fallback if not found.
        """
        config = self.bot.config
        if not config.has_section(section) or not config.has_option(section, key):
            return fallback

        try:
            if value_type == 'bool':
                return config.getboolean(section, key)
            if value_type == 'int':
                return config.getint(section, key)
            if value_type == 'float':
                return config.getfloat(section, key)
            raw_value = config.get(section, key)
            if value_type == 'list':
                # Parse comma-separated list
                return [item.strip() for item in raw_value.split(',') if item.strip()]
            if value_type != 'str':
                self.logger.warning(f"Unknown value_type '{value_type}' for {section}.{key}, returning as string")
            return raw_value
        except (ValueError, TypeError) as e:
            self.logger.warning(f"Invalid value for {section}.{key}, using default {fallback!r}: {e}")
            return fallback

    def _derive_config_section_name(self) -> str:
        """Derive config section name from command name.

        Acronym names like "ai" -> "AI_Command"
        Regular names like "sports" -> "Sports_Command"

        Returns:
            str: The derived config section name.
        """
        acronym_map = {
            'ai': 'AI',
            'yt': 'YT',
        }
        base_name = acronym_map.get(self.name, self.name.title())
        return f"{base_name}_Command"

    @abstractmethod
    async def execute(self, ctx: CommandContext) -> bool:
        """Execute the command for one invocation.

        Args:
            ctx: The parsed invocation (user, display name, argument string).

        Returns:
            bool: True if the command did its work, False if it was rejected or failed.
        """
        pass

    def get_help_text(self) -> str:
        """Get the one-line listing entry for this command.

        Returns:
            str: Emoji, usage and description.
        """
        prefix = f"{self.emoji} " if self.emoji else ""
        return f"{prefix}{self.usage or self.name} - {self.description or 'No description available'}"

    def profile_link(self, user_id: str) -> str:
        template = self.bot.config.get('Bot', 'profile_url_template', fallback=DEFAULT_PROFILE_URL_TEMPLATE)
        return generate_profile_link(user_id, template)

    def check_cooldown(self, user_id: str) -> bool:
        """Check whether the user is still on cooldown for this command.

        Returns:
            bool: True if the user must wait, False if the command may run.
        """
        if self.action_type is None:
            return False
        on_cooldown = self.bot.state_manager.check_cooldown(user_id, self.action_type)
        if on_cooldown:
            remaining = self.bot.state_manager.time_until_next(user_id, self.action_type)
            self.logger.debug(f"{self.name} on cooldown for {user_id} ({remaining:.1f}s left)")
        return on_cooldown

    def record_execution(self, user_id: str) -> None:
        """Start the user's cooldown after a completed reply"""
        if self.action_type is not None:
            self.bot.state_manager.set_cooldown(user_id, self.action_type)

    def get_metadata(self) -> Dict[str, Any]:
        """Get plugin metadata for discovery and registration.

        Returns:
            Dict[str, Any]: A dictionary containing metadata about the command.
        """
        return {
            'name': self.name,
            'keywords': self.keywords,
            'description': self.description,
            'usage': self.usage,
            'emoji': self.emoji,
            'category': self.category,
            'action_type': self.action_type.value if self.action_type else None,
            'class_name': self.__class__.__name__,
            'module_name': self.__class__.__module__,
        }

    async def send_response(self, ctx: CommandContext, content: str) -> bool:
        """Unified method for sending replies.

        Args:
            ctx: The invocation being answered.
            content: The reply text.

        Returns:
            bool: True if the reply was sent successfully, False otherwise.
        """
        try:
            return await self.bot.command_manager.send_response(content)
        except Exception as e:
            self.logger.error(f"Failed to send response to {ctx.user_id}: {e}")
            return False
