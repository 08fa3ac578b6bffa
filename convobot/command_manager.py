#!/usr/bin/env python3
"""
Command management functionality for the Convo Bot
Routes slash-commands to plugins under rate limits and per-command locks
"""

from typing import Any, Dict, Optional, Tuple

from .commands.base_command import BaseCommand
from .config_validation import strip_optional_quotes
from .models import ChatMessage, CommandContext
from .plugin_loader import PluginLoader

GENERIC_ERROR_MESSAGE = "An error occurred while processing your command. Please try again."


class CommandManager:
    """Manages all bot commands using dynamic plugin loading.

    Every accepted invocation runs under the shared state manager: the user's
    rate limit is counted first, then the (user, command) lock is taken and is
    released whatever the plugin does. Rejections are silent.
    """

    def __init__(self, bot):
        self.bot = bot
        self.logger = bot.logger
        self.state_manager = bot.state_manager

        self.command_prefix = self.load_command_prefix()

        # Initialize plugin loader and load all plugins
        self.plugin_loader = PluginLoader(bot)
        self.commands: Dict[str, BaseCommand] = self.plugin_loader.load_all_plugins()

        self.logger.info(f"CommandManager initialized with {len(self.commands)} plugins")

    def load_command_prefix(self) -> str:
        """Load command prefix from config.

        Returns:
            str: The command prefix, ``/`` if not configured.
        """
        prefix = strip_optional_quotes(self.bot.config.get('Bot', 'command_prefix', fallback='/'))
        return prefix.strip() or '/'

    def parse_command(self, content: str) -> Optional[Tuple[str, str]]:
        """Split prefixed text into (command name, argument string).

        The name is lower-cased; the arguments are everything after the first
        run of whitespace, stripped. Returns None when there is no prefix or
        no command name.
        """
        content = content.strip()
        if not content.startswith(self.command_prefix):
            return None
        parts = content[len(self.command_prefix):].split(None, 1)
        if not parts:
            return None
        name = parts[0].lower()
        args = parts[1].strip() if len(parts) > 1 else ''
        return name, args

    async def dispatch(self, message: ChatMessage) -> None:
        """Handle one inbound message.

        Args:
            message: The inbound chat message.
        """
        content = (message.content or '').strip()
        if not content.startswith(self.command_prefix):
            return

        user_id = message.sender_id
        if self.state_manager.is_rate_limited(user_id):
            self.logger.debug(f"Rate limited {user_id}, dropping: {content[:50]}")
            return

        parsed = self.parse_command(content)
        if parsed is None:
            return
        command_name, args = parsed

        command = self.plugin_loader.get_plugin_by_keyword(command_name)
        if command is None:
            self.logger.debug(f"Unknown command '{command_name}' from {user_id}")
            return

        if not self.state_manager.acquire_lock(user_id, command.name):
            self.logger.debug(f"Command '{command.name}' already running for {user_id}, dropping")
            return

        ctx = CommandContext(
            user_id=user_id,
            display_name=message.sender_name,
            args=args,
            message=message,
        )
        try:
            self.logger.info(f"Command '{command.name}' from {message.sender_name} ({user_id})")
            await command.execute(ctx)
        except Exception as e:
            self.logger.error(f"Error executing command '{command.name}': {e}", exc_info=True)
            await self.send_response(GENERIC_ERROR_MESSAGE)
        finally:
            self.state_manager.release_lock(user_id, command.name)

    async def send_response(self, content: str) -> bool:
        """Send a reply through the bot's transport.

        Args:
            content: The response content.

        Returns:
            bool: True if response was sent successfully, False otherwise.
        """
        try:
            await self.bot.transport.send(content)
            return True
        except Exception as e:
            self.logger.error(f"Failed to send response: {e}")
            return False

    def get_available_commands_list(self) -> str:
        """Get a formatted list of available commands"""
        return "\n".join(command.get_help_text() for command in self.commands.values())

    def get_plugin_by_keyword(self, keyword: str) -> Optional[BaseCommand]:
        return self.plugin_loader.get_plugin_by_keyword(keyword)

    def get_plugin_by_name(self, name: str) -> Optional[BaseCommand]:
        return self.plugin_loader.get_plugin_by_name(name)

    def get_plugin_metadata(self, plugin_name: Optional[str] = None) -> Dict[str, Any]:
        if plugin_name:
            return self.plugin_loader.plugin_metadata.get(plugin_name, {})
        return dict(self.plugin_loader.plugin_metadata)
