#!/usr/bin/env python3
"""
Data models for the Convo Bot
Contains shared data structures used across modules
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from .enums import GameState


@dataclass
class ChatMessage:
    """Inbound chat message as delivered by the transport"""
    content: str
    sender_id: str
    sender_name: str = "Unknown"
    timestamp: Optional[float] = None

    @classmethod
    def from_event(cls, data: Dict[str, Any]) -> "ChatMessage":
        """Build a message from a raw transport event.

        The event carries ``uid``, ``message`` and a ``users`` directory mapping
        user ids to profile dicts. The display name falls back to "Unknown".
        """
        uid = str(data.get('uid', ''))
        users = data.get('users') or {}
        profile = users.get(uid) or users.get(data.get('uid')) or {}
        return cls(
            content=data.get('message') or '',
            sender_id=uid,
            sender_name=profile.get('username') or 'Unknown',
            timestamp=data.get('timestamp'),
        )


@dataclass
class CommandContext:
    """Arguments handed to a command plugin for one invocation"""
    user_id: str
    display_name: str
    args: str
    message: Optional[ChatMessage] = None


@dataclass(frozen=True)
class League:
    """Static league catalog entry"""
    key: str
    odds_id: str
    scoreboard_endpoint: str
    news_endpoint: str


@dataclass
class TeamLine:
    """One side of a game as shown in a report"""
    abbreviation: str
    score: str = "0"
    record: str = ""


@dataclass
class BookmakerQuote:
    """Moneyline and spread quotes from one bookmaker, keyed by provider team name"""
    key: str
    moneyline: Dict[str, float] = field(default_factory=dict)
    spreads: Dict[str, Tuple[float, float]] = field(default_factory=dict)


@dataclass
class GameOdds:
    """Odds for one game from the odds provider"""
    home_team: str
    away_team: str
    bookmakers: Dict[str, BookmakerQuote] = field(default_factory=dict)


@dataclass
class GameSummary:
    """A scoreboard event reduced to what the sports report needs"""
    home: TeamLine
    away: TeamLine
    state: GameState
    start_time: Optional[datetime] = None
    period: Optional[int] = None
    clock: str = ""
    detail: str = ""
    odds: Optional[GameOdds] = None

    @property
    def is_live(self) -> bool:
        return self.state == GameState.LIVE


@dataclass
class NewsItem:
    """Latest league headline"""
    headline: str
    link: str
    published: Optional[datetime] = None
