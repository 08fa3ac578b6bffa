#!/usr/bin/env python3
"""
YouTube Command for the Convo Bot
Replies with the first YouTube video matching a search term
"""

from .base_command import BaseCommand
from ..clients.base_client import ExternalServiceError
from ..enums import ActionType
from ..models import CommandContext
from ..security_utils import sanitize_input


class YoutubeCommand(BaseCommand):
    """Handles the yt command using the YouTube Data API"""

    # Plugin metadata
    name = "yt"
    keywords = ['yt']
    description = "Search YouTube for videos"
    emoji = "🎥"
    category = "media"
    action_type = ActionType.VIDEO_SEARCH

    # Documentation
    usage = "/yt [search term]"
    examples = ["/yt funny cat videos"]

    async def execute(self, ctx: CommandContext) -> bool:
        if self.check_cooldown(ctx.user_id):
            return False

        query = sanitize_input(ctx.args)
        if not query:
            await self.send_response(ctx, "Please provide a valid search term for YouTube.")
            return False

        link = self.profile_link(ctx.user_id)
        try:
            video_url = await self.bot.youtube_client.search(query)
        except ExternalServiceError as e:
            self.logger.error(f"YouTube search failed for {query!r}: {e}")
            await self.send_response(ctx, f"YouTube video for {link}: Error searching YouTube.")
            return False

        result = video_url or "No videos found. Try a different search term."
        await self.send_response(ctx, f"YouTube video for {link}: {result}")
        self.record_execution(ctx.user_id)
        return True
