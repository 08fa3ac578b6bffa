#!/usr/bin/env python3
"""
Sports Command for the Convo Bot
Live scores, upcoming games, odds and the latest headline for a league
"""

from .base_command import BaseCommand
from ..clients.sports_mappings import invalid_sport_message
from ..enums import ActionType
from ..models import CommandContext


class SportsCommand(BaseCommand):
    """Handles the sports command by delegating to the sports aggregator"""

    # Plugin metadata
    name = "sports"
    keywords = ['sports']
    description = "Get live scores, upcoming games, and odds (e.g., /sports nba)"
    emoji = "🏀"
    category = "sports"
    action_type = ActionType.SPORTS

    # Documentation
    usage = "/sports [league]"
    examples = ["/sports nfl"]

    def __init__(self, bot):
        super().__init__(bot)
        self.enforce_cooldown = self.get_config_value(
            self._derive_config_section_name(), 'enforce_cooldown', fallback=False, value_type='bool'
        )

    @property
    def valid_leagues(self):
        return list(self.bot.sports_aggregator.leagues.keys())

    def check_cooldown(self, user_id: str) -> bool:
        return self.enforce_cooldown and super().check_cooldown(user_id)

    def record_execution(self, user_id: str) -> None:
        if self.enforce_cooldown:
            super().record_execution(user_id)

    async def execute(self, ctx: CommandContext) -> bool:
        if self.check_cooldown(ctx.user_id):
            return False

        league = ctx.args.strip().lower()
        if not league:
            await self.send_response(
                ctx,
                "Please provide a sport (e.g., /sports nfl).\n"
                f"Valid sports: {', '.join(self.valid_leagues)}"
            )
            return False

        if league not in self.bot.sports_aggregator.leagues:
            await self.send_response(ctx, invalid_sport_message())
            return False

        try:
            report = await self.bot.sports_aggregator.fetch_league_data(league)
        except Exception as e:
            self.logger.error(f"Error in sports command: {e}")
            await self.send_response(ctx, "Error processing sports command.")
            return False

        await self.send_response(ctx, report)
        self.record_execution(ctx.user_id)
        return True
