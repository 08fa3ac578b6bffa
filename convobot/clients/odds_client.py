#!/usr/bin/env python3
"""
The Odds API client for the Convo Bot
Fetches moneyline and spread quotes for upcoming games
"""

import logging
from typing import Any, Dict, List, Optional

from .base_client import ExternalServiceError, JsonHttpClient
from ..models import League


class OddsClient(JsonHttpClient):
    """Client for https://the-odds-api.com (v4)"""

    ODDS_API_URL = "https://api.the-odds-api.com/v4/sports/{sport}/odds"

    def __init__(self, api_key: str, bookmakers: Optional[List[str]] = None,
                 logger: Optional[logging.Logger] = None, timeout: float = 10):
        super().__init__(logger=logger, timeout=timeout)
        self.api_key = api_key
        self.bookmakers = bookmakers or ['fanduel', 'draftkings']

    async def fetch_odds(self, league: League) -> List[Dict[str, Any]]:
        """Fetch the provider's game list with bookmaker quotes.

        Raises:
            ExternalServiceError: On request failure or a non-list payload
                (the API returns an error object when the key is invalid).
        """
        if not self.api_key:
            raise ExternalServiceError("Odds API key not configured")

        params = {
            'apiKey': self.api_key,
            'regions': 'us',
            'markets': 'h2h,spreads',
            'bookmakers': ','.join(self.bookmakers),
        }
        data = await self.get_json(self.ODDS_API_URL.format(sport=league.odds_id), params=params)
        if not isinstance(data, list):
            raise ExternalServiceError(f"Unexpected odds payload for {league.key}")
        return data
