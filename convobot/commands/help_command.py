#!/usr/bin/env python3
"""
Commands listing for the Convo Bot
Lists the loaded commands, the valid sports and example invocations
"""

from typing import List

from .base_command import BaseCommand
from ..enums import ActionType
from ..models import CommandContext


class HelpCommand(BaseCommand):
    """Handles the commands command"""

    # Plugin metadata
    name = "commands"
    keywords = ['commands']
    description = "List all available commands"
    emoji = "ℹ️"
    category = "basic"
    action_type = ActionType.COMMANDS_LIST

    # Documentation
    usage = "/commands"
    examples = ["/commands"]

    # Listing order; commands not named here follow alphabetically
    DISPLAY_ORDER = ['ai', 'yt', 'sports', 'commands']

    def _ordered_commands(self) -> List[BaseCommand]:
        commands = self.bot.command_manager.commands
        rank = {name: index for index, name in enumerate(self.DISPLAY_ORDER)}
        names = sorted(commands, key=lambda name: (rank.get(name, len(rank)), name))
        return [commands[name] for name in names]

    def build_listing(self) -> str:
        lines = ["Available Commands:"]
        lines.extend(command.get_help_text() for command in self._ordered_commands())

        aggregator = getattr(self.bot, 'sports_aggregator', None)
        if aggregator is not None:
            lines.append("")
            lines.append(f"Valid sports: {', '.join(aggregator.leagues.keys())}")

        examples = [example for command in self._ordered_commands()
                    for example in command.examples if command is not self]
        if examples:
            lines.append("")
            lines.append("Examples:")
            lines.extend(examples)
        return "\n".join(lines)

    async def execute(self, ctx: CommandContext) -> bool:
        if self.check_cooldown(ctx.user_id):
            return False

        await self.send_response(ctx, self.build_listing())
        self.record_execution(ctx.user_id)
        return True
