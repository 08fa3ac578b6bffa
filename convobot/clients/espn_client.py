#!/usr/bin/env python3
"""
ESPN API client for the Convo Bot
Fetches league scoreboards and news from ESPN's public site API
API description via https://github.com/zuplo/espn-openapi/
"""

from typing import Any, Dict, List, Optional

from .base_client import ExternalServiceError, JsonHttpClient
from ..models import League


class ESPNClient(JsonHttpClient):
    """Scoreboard and news fetches for a catalog league"""

    async def fetch_scoreboard(self, league: League) -> List[Dict[str, Any]]:
        """Fetch the league scoreboard.

        Returns:
            List[Dict[str, Any]]: Raw scoreboard events (possibly empty).

        Raises:
            ExternalServiceError: If the request fails or the body is malformed.
        """
        data = await self.get_json(league.scoreboard_endpoint)
        if not isinstance(data, dict):
            raise ExternalServiceError(f"Unexpected scoreboard payload for {league.key}")
        events = data.get('events') or []
        self.logger.debug(f"ESPN scoreboard for {league.key}: {len(events)} events")
        return events

    async def fetch_latest_article(self, league: League) -> Optional[Dict[str, Any]]:
        """Fetch the most recent news article for the league, or None if there is none"""
        data = await self.get_json(league.news_endpoint, params={'limit': 1})
        if not isinstance(data, dict):
            raise ExternalServiceError(f"Unexpected news payload for {league.key}")
        articles = data.get('articles') or []
        return articles[0] if articles else None
