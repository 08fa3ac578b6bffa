#!/usr/bin/env python3
"""
Chat transports for the Convo Bot
The send/receive boundary between the bot and a chat platform
"""

import asyncio
import logging
import sys
import threading
from abc import ABC, abstractmethod
from typing import AsyncIterator, Optional, TextIO

from .models import ChatMessage


class ChatTransport(ABC):
    """Delivers inbound messages and posts replies to the chat room"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger('ConvoBot')

    @abstractmethod
    async def send(self, text: str) -> None:
        """Post a message to the room"""

    @abstractmethod
    def messages(self) -> AsyncIterator[ChatMessage]:
        """Yield inbound messages until the transport closes"""

    async def close(self) -> None:
        pass


class ConsoleTransport(ChatTransport):
    """Local transport reading ``uid:username: text`` lines from a stream.

    Lines without the ``uid:username:`` header are attributed to a local
    console user. Replies are written to the output stream.

    The input stream is read on a daemon thread so a blocking read never
    holds up shutdown.
    """

    LOCAL_UID = '0'
    LOCAL_NAME = 'console'

    def __init__(self, logger: Optional[logging.Logger] = None,
                 input_stream: Optional[TextIO] = None,
                 output_stream: Optional[TextIO] = None):
        super().__init__(logger)
        self.input_stream = input_stream or sys.stdin
        self.output_stream = output_stream or sys.stdout
        self._queue: Optional[asyncio.Queue] = None
        self._reader: Optional[threading.Thread] = None

    @classmethod
    def parse_line(cls, line: str) -> Optional[ChatMessage]:
        line = line.strip()
        if not line:
            return None
        parts = line.split(':', 2)
        if len(parts) == 3 and parts[0].strip().isdigit():
            uid, username, text = (part.strip() for part in parts)
            return ChatMessage(content=text, sender_id=uid, sender_name=username or 'Unknown')
        return ChatMessage(content=line, sender_id=cls.LOCAL_UID, sender_name=cls.LOCAL_NAME)

    async def send(self, text: str) -> None:
        self.output_stream.write(f"{text}\n")
        self.output_stream.flush()

    def _read_lines(self, loop: asyncio.AbstractEventLoop, queue: asyncio.Queue) -> None:
        try:
            for line in iter(self.input_stream.readline, ''):
                loop.call_soon_threadsafe(queue.put_nowait, line)
            # None marks end of input
            loop.call_soon_threadsafe(queue.put_nowait, None)
        except RuntimeError:
            # Event loop already closed during shutdown
            return

    async def messages(self) -> AsyncIterator[ChatMessage]:
        loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._reader = threading.Thread(
            target=self._read_lines, args=(loop, self._queue), name='console-reader', daemon=True
        )
        self._reader.start()

        while True:
            line = await self._queue.get()
            if line is None:
                self.logger.info("Console input closed")
                break
            message = self.parse_line(line)
            if message is not None:
                yield message

    async def close(self) -> None:
        if self._queue is not None:
            self._queue.put_nowait(None)
