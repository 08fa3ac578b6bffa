#!/usr/bin/env python3
"""
Gemini API client for the Convo Bot
Generates short text replies with Google's generateContent endpoint
"""

import logging
from typing import Optional

from .base_client import JsonHttpClient


class GeminiClient(JsonHttpClient):
    """Text generation via the Gemini REST API"""

    API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
    DEFAULT_MODEL = "gemini-1.5-flash-latest"

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL,
                 logger: Optional[logging.Logger] = None, timeout: float = 10):
        super().__init__(logger=logger, timeout=timeout)
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL

    async def generate(self, prompt: str) -> str:
        """Generate a reply for a prompt.

        Returns:
            str: The first candidate's text, stripped; empty if the API
                returned no candidate.

        Raises:
            ExternalServiceError: If the request fails or times out.
        """
        payload = {'contents': [{'parts': [{'text': prompt}]}]}
        data = await self.post_json(
            self.API_URL.format(model=self.model), payload, params={'key': self.api_key}
        )
        try:
            text = data['candidates'][0]['content']['parts'][0]['text']
        except (KeyError, IndexError, TypeError):
            self.logger.debug("Gemini returned no candidate text")
            return ''
        return (text or '').strip()
