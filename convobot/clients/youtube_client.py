#!/usr/bin/env python3
"""
YouTube Data API v3 client for the Convo Bot
Finds the first video matching a search query
"""

import logging
from typing import Optional

from .base_client import JsonHttpClient


class YoutubeClient(JsonHttpClient):
    """Video search via the YouTube Data API"""

    SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
    WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

    def __init__(self, api_key: str, logger: Optional[logging.Logger] = None, timeout: float = 10):
        super().__init__(logger=logger, timeout=timeout)
        self.api_key = api_key

    async def search(self, query: str) -> Optional[str]:
        """Return the watch link of the first result, or None when nothing matched.

        Raises:
            ExternalServiceError: If the request fails or times out.
        """
        params = {
            'part': 'snippet',
            'maxResults': 1,
            'type': 'video',
            'q': query,
            'key': self.api_key,
        }
        data = await self.get_json(self.SEARCH_URL, params=params)
        items = data.get('items') if isinstance(data, dict) else None
        if not items:
            return None
        video_id = (items[0].get('id') or {}).get('videoId')
        if not video_id:
            return None
        return self.WATCH_URL.format(video_id=video_id)
