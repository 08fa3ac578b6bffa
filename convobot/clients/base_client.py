#!/usr/bin/env python3
"""
Shared JSON-over-HTTP client for the Convo Bot API clients
Owns one aiohttp session and applies a bounded timeout to every request
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp


class ExternalServiceError(Exception):
    """An external API call failed, timed out or returned an unusable response"""


class JsonHttpClient:
    """Base class for the read-only JSON APIs the bot calls.

    The aiohttp session is created lazily in the running event loop and reused
    until ``close()``. Every failure mode (non-200 status, timeout, connection
    error, invalid JSON) is raised as ExternalServiceError so callers only have
    one exception type to degrade on.
    """

    user_agent = 'ConvoBot/1.0'

    def __init__(self, logger: Optional[logging.Logger] = None, timeout: float = 10):
        self.logger = logger or logging.getLogger('ConvoBot')
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure HTTP session exists in the current event loop"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(headers={'User-Agent': self.user_agent})
            self.logger.debug(f"Created {self.__class__.__name__} HTTP session")
        return self.session

    async def _request_json(self, method: str, url: str, **kwargs) -> Any:
        session = await self._ensure_session()
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with session.request(method, url, timeout=timeout, **kwargs) as response:
                if response.status != 200:
                    raise ExternalServiceError(f"HTTP {response.status} from {url}")
                return await response.json(content_type=None)
        except asyncio.TimeoutError:
            raise ExternalServiceError(f"Request timeout after {self.timeout} seconds: {url}")
        except (aiohttp.ClientError, ValueError) as e:
            raise ExternalServiceError(f"Request to {url} failed: {e}")

    async def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET a URL and decode the JSON body"""
        return await self._request_json('GET', url, params=params)

    async def post_json(self, url: str, payload: Dict[str, Any],
                        params: Optional[Dict[str, Any]] = None) -> Any:
        """POST a JSON payload and decode the JSON body"""
        return await self._request_json('POST', url, json=payload, params=params)

    async def close(self) -> None:
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None
