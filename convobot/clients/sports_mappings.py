#!/usr/bin/env python3
"""
Static sports catalog for the Convo Bot
League endpoints on ESPN and The Odds API, plus bookmaker display labels
"""

from typing import Dict, List

from ..models import League

ESPN_BASE_URL = "https://site.api.espn.com/apis/site/v2/sports"

# Declaration order is the order shown to users
LEAGUE_CATALOG: Dict[str, League] = {
    'nfl': League(
        key='nfl',
        odds_id='americanfootball_nfl',
        scoreboard_endpoint=f"{ESPN_BASE_URL}/football/nfl/scoreboard",
        news_endpoint=f"{ESPN_BASE_URL}/football/nfl/news",
    ),
    'nba': League(
        key='nba',
        odds_id='basketball_nba',
        scoreboard_endpoint=f"{ESPN_BASE_URL}/basketball/nba/scoreboard",
        news_endpoint=f"{ESPN_BASE_URL}/basketball/nba/news",
    ),
    'nhl': League(
        key='nhl',
        odds_id='icehockey_nhl',
        scoreboard_endpoint=f"{ESPN_BASE_URL}/hockey/nhl/scoreboard",
        news_endpoint=f"{ESPN_BASE_URL}/hockey/nhl/news",
    ),
    'mlb': League(
        key='mlb',
        odds_id='baseball_mlb',
        scoreboard_endpoint=f"{ESPN_BASE_URL}/baseball/mlb/scoreboard",
        news_endpoint=f"{ESPN_BASE_URL}/baseball/mlb/news",
    ),
}

# Bookmaker key at the odds provider -> short label in reports
BOOKMAKER_LABELS: Dict[str, str] = {
    'fanduel': 'FD',
    'draftkings': 'DK',
}


def valid_league_keys() -> List[str]:
    return list(LEAGUE_CATALOG.keys())


def invalid_sport_message() -> str:
    return f"Invalid sport. Valid sports are: {', '.join(valid_league_keys())}"
