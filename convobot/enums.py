#!/usr/bin/env python3
"""
Enums for the Convo Bot
Shared by the state manager, command plugins and the sports aggregator
"""

from enum import Enum


class ActionType(Enum):
    """Cooldown-gated action categories. Each has its own cooldown duration."""
    GENERAL = "general"
    VIDEO_SEARCH = "video_search"
    COMMANDS_LIST = "commands_list"
    SPORTS = "sports"


class GameState(Enum):
    """Scoreboard state of a single game"""
    LIVE = "in"
    UPCOMING = "pre"
    FINAL = "post"
